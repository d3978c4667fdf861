import logging
from types import SimpleNamespace

from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException

from taskboard.errors import InternalError, TaskboardError
from taskboard.services.auth_service import AuthService
from taskboard.services.task_service import TaskService
from taskboard.stores.task_store import TaskStore
from taskboard.stores.user_store import UserStore
from taskboard.utils.db import init_app as init_db
from taskboard.utils.identity import build_provider
from taskboard.utils.passwords import PasswordHasher
from taskboard.utils.responses import failure, success


def create_app(overrides=None, mongo_client=None):
    app = Flask(__name__)
    app.config.from_object("taskboard.config.Config")
    if overrides:
        app.config.update(overrides)

    logging.getLogger("taskboard").setLevel(app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Core extensions
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)
    JWTManager(app)

    db = init_db(app, mongo_client)

    # Everything request handlers need is built once here from app.config
    users = UserStore(db)
    tasks = TaskStore(db)
    proofs = build_provider(app.config, db)
    for indexed in (users, tasks, proofs):
        indexed.ensure_indexes()

    app.extensions["taskboard"] = SimpleNamespace(
        proofs=proofs,
        auth=AuthService(
            users,
            PasswordHasher(rounds=app.config["BCRYPT_ROUNDS"]),
            proofs,
            password_min_length=app.config["PASSWORD_MIN_LENGTH"],
        ),
        tasks=TaskService(tasks),
    )
    app.logger.info("Identity proofs in %s mode", proofs.mode)

    # Register blueprints
    from taskboard.routes.auth_routes import auth_bp
    from taskboard.routes.task_routes import tasks_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    @app.get("/api/health")
    def health():
        return success({"status": "ok", "service": "Taskboard API"})

    @app.errorhandler(TaskboardError)
    def service_error(exc):
        return failure(exc.message, exc.status_code)

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return failure(exc.name, exc.code)

    @app.errorhandler(Exception)
    def server_error(exc):
        app.logger.exception("Unhandled error: %s", exc)
        return service_error(InternalError())

    return app
