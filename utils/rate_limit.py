# utils/rate_limit.py
"""
In-memory fixed-window rate limiting.

Counters live in the worker process, so limits apply per gunicorn worker.
"""
import math
import time
import logging
import threading
from collections import namedtuple
from functools import wraps

from flask import jsonify, request

from config import Config

logger = logging.getLogger(__name__)

RateLimitResult = namedtuple('RateLimitResult', ['success', 'remaining', 'reset_in'])


class RateLimiter:
    def __init__(self, name, limit, window_seconds, clock=time.monotonic):
        self.name = name
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._entries = {}  # identifier -> [count, reset_at]
        self._lock = threading.Lock()

    def _purge(self, now):
        expired = [key for key, (_, reset_at) in self._entries.items() if now > reset_at]
        for key in expired:
            del self._entries[key]

    def check(self, identifier):
        """Count a hit for identifier and report whether it is allowed."""
        with self._lock:
            now = self._clock()
            self._purge(now)
            entry = self._entries.get(identifier)

            if entry is None:
                self._entries[identifier] = [1, now + self.window_seconds]
                return RateLimitResult(True, self.limit - 1, self.window_seconds)

            count, reset_at = entry
            if count >= self.limit:
                return RateLimitResult(False, 0, reset_at - now)

            entry[0] = count + 1
            return RateLimitResult(True, self.limit - entry[0], reset_at - now)

    def reset(self, identifier=None):
        """Forget one identifier, or everyone when identifier is None."""
        with self._lock:
            if identifier is None:
                self._entries.clear()
            else:
                self._entries.pop(identifier, None)


def get_client_identifier(req):
    forwarded = req.headers.get('X-Forwarded-For')
    if forwarded:
        return forwarded.split(',')[0].strip() or 'unknown'

    real_ip = req.headers.get('X-Real-IP')
    if real_ip:
        return real_ip

    return req.remote_addr or 'unknown'


rate_limiters = {
    name: RateLimiter(name, limit, window)
    for name, (limit, window) in Config.RATE_LIMITS.items()
}


def rate_limited(name):
    """Decorator answering 429 once the named limiter is exhausted for the caller."""
    limiter = rate_limiters[name]

    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            result = limiter.check(get_client_identifier(request))
            if not result.success:
                logger.warning(f"Rate limit '{limiter.name}' exceeded for {get_client_identifier(request)}")
                response = jsonify({'error': 'Too many requests. Please try again later.'})
                response.status_code = 429
                response.headers['Retry-After'] = str(max(1, math.ceil(result.reset_in)))
                return response
            return f(*args, **kwargs)
        return decorated
    return decorator
