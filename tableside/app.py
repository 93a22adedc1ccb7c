"""
Project: Tableside
Description:
Main application entry point. Initializes Flask, the document store and
Socket.IO, registers the resource blueprints and error handlers, and
launches the app.
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import Config, TestingConfig
from .events import socketio
from .models import db
from .orders import OrderError
from .routes import register_blueprints
from .seed import seed_store
from .store import init_store

log = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger("tableside").setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"message": e.description, "error": e.name}), e.code

    @app.errorhandler(OrderError)
    def order_error(e):
        return jsonify({"message": e.message}), e.status_code

    @app.errorhandler(Exception)
    def unexpected_error(e):
        log.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500


def create_app(testing: bool = False, config=None):
    app = Flask(__name__)
    app.config.from_object(TestingConfig if testing else Config)
    if config:
        app.config.update(config)

    configure_logging(app)
    CORS(app)
    db.init_app(app)
    # bind socketio to this app
    socketio.init_app(app, async_mode=app.config.get("SOCKETIO_ASYNC_MODE"))

    store = init_store(app)
    if app.config.get("SEED_MOCK_DATA"):
        with app.app_context():
            seed_store(store)

    register_blueprints(app)
    register_error_handlers(app)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


def main():
    app = create_app()
    socketio.run(app, host="0.0.0.0", port=app.config["PORT"])


if __name__ == "__main__":
    main()
