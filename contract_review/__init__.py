"""
Contract Review Application Factory
"""
import os
from datetime import datetime, timezone

from flask import Flask, jsonify, render_template

from contract_review.config import config

# Version info
APP_VERSION = os.environ.get("APP_VERSION", "2026.10")


def create_app(config_name='default'):
    app = Flask(__name__, template_folder="templates", static_folder="static", static_url_path="/static")
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Register blueprints
    from contract_review.api import api_bp

    app.register_blueprint(api_bp)

    @app.route('/')
    def index():
        """Single-page contract review UI"""
        return render_template(
            "index.html",
            version=app.config.get("APP_VERSION", APP_VERSION),
            max_upload_mb=app.config["MAX_UPLOAD_BYTES"] // (1024 * 1024),
        )

    # Health check endpoint
    @app.route('/healthz')
    def healthz():
        """Health check for load balancers and monitoring"""
        from contract_review.services.openai_service import client_ready, model_name

        ok, msg = client_ready()
        return jsonify({
            "ok": True,
            "app_version": app.config.get("APP_VERSION", APP_VERSION),
            "time_utc": datetime.now(timezone.utc).isoformat(),
            "openai_ready": ok,
            "openai_message": msg,
            "model": model_name(),
        })

    # Version endpoint
    @app.route('/version')
    def version():
        """Version and build info"""
        return jsonify({
            "version": app.config.get("APP_VERSION", APP_VERSION),
            "build_time": app.config.get("BUILD_TIME", ""),
            "git_commit": app.config.get("GIT_COMMIT", ""),
            "features": {
                "progress_stages": True,
                "pdf_export": True,
                "docx_upload": True,
            }
        })

    app.logger.info('Contract review app created (config=%s)', config_name)
    return app
