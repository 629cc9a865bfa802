# utils/auth.py
from functools import wraps
from flask import request, jsonify
import logging

from database import get_db, SupabaseConfigError

logger = logging.getLogger(__name__)


def get_bearer_token(req):
    auth_header = req.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None
    token = auth_header[len('Bearer '):].strip()
    return token or None


def token_required(f):
    """Verify the Supabase access token and pass the user id to the view."""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_bearer_token(request)
        if not token:
            return jsonify({'error': 'Unauthorized', 'message': 'Token is missing!'}), 401

        try:
            with get_db() as client:
                # Verify the JWT token with Supabase
                user_response = client.auth.get_user(token)
        except SupabaseConfigError as e:
            logger.error(f"Auth unavailable: {str(e)}")
            return jsonify({'error': 'Authentication is not configured'}), 500
        except Exception as e:
            logger.error(f"Token validation error: {str(e)}")
            return jsonify({'error': 'Unauthorized', 'message': 'Invalid token!'}), 401

        user = getattr(user_response, 'user', None) if user_response else None
        if user is None:
            return jsonify({'error': 'Unauthorized', 'message': 'Invalid token!'}), 401

        return f(user.id, *args, **kwargs)

    return decorated
