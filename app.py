"""
Business Card Extraction API - Flask Application Entry Point.

Extracts structured contact records from Korean/English business card
images and OCR text.
"""

import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config, get_config
from api.routes import api_bp

logger = logging.getLogger(__name__)

API_INFO = {
    "name": "Business Card Extraction API",
    "version": "1.0.0",
    "description": "Extract name, company, position and contact details from business cards",
    "endpoints": {
        "health": "/api/health",
        "status": "/api/status",
        "process_single": "POST /api/process",
        "parse_text": "POST /api/parse-text",
        "sheet_row": "POST /api/sheet-row",
        "check_duplicate": "POST /api/check-duplicate"
    }
}


def create_app(config_name: str = None) -> Flask:
    """Application factory for creating Flask app.

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    config_class = get_config(config_name)
    config_class.init_app(app)

    # Enable CORS
    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })

    # Register blueprints
    app.register_blueprint(api_bp)

    @app.route("/")
    def index():
        """API description."""
        return jsonify(API_INFO)

    @app.route("/api/info")
    def api_info():
        """API information endpoint."""
        return jsonify(API_INFO)

    @app.route("/favicon.ico")
    def favicon():
        """Return empty response for favicon requests."""
        return "", 204

    # Global error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({
            "success": False,
            "error": "Not found"
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return jsonify({
            "success": False,
            "error": "Method not allowed"
        }), 405

    @app.errorhandler(413)
    def request_entity_too_large(error):
        """Handle file too large errors."""
        return jsonify({
            "success": False,
            "error": f"File too large. Maximum size: {Config.MAX_CONTENT_LENGTH // (1024*1024)}MB"
        }), 413

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal error: {str(error)}")
        return jsonify({
            "success": False,
            "error": "Internal server error"
        }), 500

    logger.info(f"Application created with config: {config_class.__name__}")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", 5000))
    debug = os.getenv("NAMECARD_DEBUG", "True").lower() == "true"

    logger.info(f"Starting server on port {port}, debug={debug}")

    app.run(
        host="0.0.0.0",
        port=port,
        debug=debug
    )
