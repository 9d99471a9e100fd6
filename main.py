from flask import Flask, request, jsonify
from flask_compress import Compress
from datetime import timedelta
import os
import logging

from quiz import init_quiz
from mint import init_mint
from wallet_connect import init_wallet_connect

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Reduce werkzeug logging for health checks
logging.getLogger('werkzeug').setLevel(logging.WARNING)
logging.getLogger('urllib3').setLevel(logging.WARNING)

compress = Compress()


def create_app(test_config=None):
    """Build the Flask app and register all modules"""
    app = Flask(__name__, static_folder='static', static_url_path='/static')
    app.secret_key = os.environ.get('SECRET_KEY', 'dev-secret-key-change-me')

    compress.init_app(app)

    # Quiz state lives in the session cookie only
    app.permanent_session_lifetime = timedelta(hours=24)
    app.config['SESSION_COOKIE_SECURE'] = os.environ.get('SESSION_COOKIE_SECURE', 'false').lower() == 'true'
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    app.config['MAX_CONTENT_LENGTH'] = 64 * 1024  # JSON bodies only
    app.json.sort_keys = False

    if test_config:
        app.config.update(test_config)

    init_quiz(app)
    init_mint(app)
    init_wallet_connect(app)

    @app.route("/health")
    def health_check():
        """Health check endpoint for deployment"""
        return jsonify({
            "status": "healthy",
            "service": "Sol Edu Badges",
            "version": "1.0.0"
        }), 200

    @app.route("/api")
    def api_status():
        return jsonify({
            "status": "online",
            "message": "Sol Edu Badges API",
            "version": "1.0.0",
            "endpoints": [
                "/api/mint",
                "/quiz/state",
                "/wallet-connect/config"
            ]
        })

    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith('/api/'):
            return jsonify({"error": "Not found"}), 404
        return e

    return app


app = create_app()


if __name__ == "__main__":
    logger.info("🚀 Starting Sol Edu Badges...")

    port = int(os.environ.get("PORT", 5000))
    logger.info(f"🌐 Starting Flask server on http://0.0.0.0:{port}")

    app.run(host="0.0.0.0", port=port, debug=False, threaded=True, use_reloader=False)
