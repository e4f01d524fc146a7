import logging
import uuid

from flask import Flask, g, jsonify, request

from ..config import Config
from .routes import bp as api_bp

log = logging.getLogger(__name__)


def create_app(config: Config | None = None):
    if config is None:
        config = Config.from_env()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.config["FUNCDOC"] = config

    # Request context middleware
    @app.before_request
    def set_request_context():
        g.request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

    @app.after_request
    def add_request_id_header(response):
        response.headers["X-Request-ID"] = g.get("request_id", "")
        return response

    app.register_blueprint(api_bp)  # /api/*

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": "bad request"}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(e):
        log.exception("Internal server error")
        return jsonify({"error": "internal server error"}), 500

    return app
