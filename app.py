# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from routes.verse import verse_bp
from routes.bible import bible_bp
from routes.strongs import strongs_bp
from routes.interlinear import interlinear_bp
from routes.sermon import sermon_bp
from routes.game import game_bp
from routes.profile import profile_bp
from database import is_configured
from dotenv import load_dotenv
import os
import logging
import time
import sys
from werkzeug.middleware.proxy_fix import ProxyFix

# Configure logging to output to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

# Initialize Flask app
app = Flask(__name__)

# Use ProxyFix to handle proxy headers properly
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

app.json.sort_keys = False  # Preserve order of keys in JSON responses
app.json.compact = True
app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024
app.config['CORS_HEADERS'] = 'Content-Type'

CORS(app, resources={
    r"/api/*": {
        "origins": "*",
        "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "expose_headers": ["Content-Type", "Authorization", "Retry-After"],
        "supports_credentials": True
    }
})

# Ensure URLs with or without trailing slashes are handled the same way
app.url_map.strict_slashes = False

if not is_configured():
    logger.warning("Supabase is not configured; profile, progress and sermon note routes will fail")

# Register blueprints
app.register_blueprint(verse_bp, url_prefix='/api/verse')
app.register_blueprint(bible_bp, url_prefix='/api/bible')
app.register_blueprint(strongs_bp, url_prefix='/api/strongs')
app.register_blueprint(interlinear_bp, url_prefix='/api/interlinear')
app.register_blueprint(sermon_bp, url_prefix='/api')
app.register_blueprint(game_bp, url_prefix='/api/game')
app.register_blueprint(profile_bp, url_prefix='/api/auth')


@app.before_request
def before_request():
    g.start_time = time.time()


@app.after_request
def after_request(response):
    # Log request duration
    start_time = getattr(g, 'start_time', None)
    if start_time is not None:
        duration = time.time() - start_time
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
    return response


@app.errorhandler(404)
def not_found(e):
    return jsonify({'error': 'Not found'}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({'error': 'Method not allowed'}), 405


@app.errorhandler(500)
def internal_error(e):
    logger.error(f"Unhandled error: {str(e)}")
    return jsonify({'error': 'Internal server error'}), 500


@app.route('/health', methods=['GET'])
def health():
    """Liveness check; reports whether Supabase credentials are present."""
    return jsonify({
        'status': 'healthy',
        'supabase': 'configured' if is_configured() else 'not configured',
        'timestamp': time.time()
    })


if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
