# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

wsgi_app = "app:app"

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info')

port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Upstream Bible APIs and Claude calls are I/O bound; rate limiter state is per worker
cores = multiprocessing.cpu_count()
workers = int(os.getenv('WEB_CONCURRENCY', min(cores * 2 + 1, 4)))
threads = 4
worker_class = "gthread"

# Sermon outline generation can take a while
timeout = 120
keepalive = 5
graceful_timeout = 30

proc_name = "berean_toolkit"


def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers x {threads} threads on port {port}")
    logger.info(f"Worker timeout set to {timeout} seconds")
