import logging

from flask import Flask, jsonify

from study_planner.config import Config
from study_planner.extensions import db, migrate


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)

    # Registers every model on db.metadata
    from study_planner import models  # noqa

    from study_planner.services.storage_service import Storage
    from study_planner.services.chapter_service import CompletionClient

    app.extensions["storage"] = Storage(db.session)
    app.extensions["completion_client"] = CompletionClient.from_config(app.config)

    from study_planner.routes.auth_routes import auth_bp
    from study_planner.routes.api_routes import api_bp

    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(api_bp, url_prefix="/api")

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    with app.app_context():
        db.create_all()

    return app
