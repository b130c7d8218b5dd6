import logging

from flask import Flask, url_for
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from config import Config
from models.attendance import AttendanceStore
from models.leave import LeaveStore
from models.users import UserStore
from utils.db import ensure_indexes, init_db_connection
from utils.errors import AttendanceError
from utils.http import failure
from utils.notifier import build_notifier
from utils.photo_store import build_photo_store
from utils.services import Services, register_services
from utils.timefmt import resolve_timezone

# Import controllers
from controllers.attendance_controller import attendance_bp
from controllers.auth_controller import auth_bp
from controllers.leave_controller import leave_bp

logger = logging.getLogger(__name__)


def create_app(config_object=Config, services=None):
    app = Flask(__name__)                # Initialize Flask app
    app.config.from_object(config_object)
    configure_logging(app)

    if services is None:
        services = build_services(app)
    register_services(app, services)

    # Register Blueprint
    app.register_blueprint(auth_bp)
    app.register_blueprint(attendance_bp)
    app.register_blueprint(leave_bp)

    register_error_handlers(app)
    register_commands(app)
    return app


def configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def build_services(app):
    """Create the Mongo, photo storage and notification clients for this app."""
    mongo = init_db_connection(app)
    db = mongo.db
    tz = resolve_timezone(app.config["ORG_TIMEZONE"])

    def local_photo_url(filename):
        return url_for("attendance.uploaded_photo", filename=filename, _external=True)

    app.extensions["attendance_mongo"] = mongo
    return Services(
        attendance=AttendanceStore(db.attendances, tz),
        users=UserStore(db.users),
        leaves=LeaveStore(db.leaves),
        photo_store=build_photo_store(app.config, local_photo_url),
        notifier=build_notifier(app.config),
    )


def register_error_handlers(app):

    @app.errorhandler(AttendanceError)
    def handle_attendance_error(e):
        return failure(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return failure(e.description, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception("Unhandled error")
        return failure("Server error.", 500)


def register_commands(app):

    @app.cli.command("init-db")
    def init_db():
        """Create the MongoDB indexes."""
        mongo = app.extensions.get("attendance_mongo")
        if mongo is None:
            raise RuntimeError("No MongoDB connection configured for this app.")
        try:
            ensure_indexes(mongo.db)
        except PyMongoError:
            logger.exception("Index creation failed")
            raise
        logger.info("MongoDB indexes are in place.")


# Run the app
if __name__ == "__main__":
    create_app().run(debug=True)
