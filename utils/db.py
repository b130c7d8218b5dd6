"""
utils/db.py
-----------------
This module initializes the MongoDB connection for the Flask application.
The PyMongo client is created per app and handed to the stores that need
it instead of being read from module state by handlers.
"""

import logging

from flask_pymongo import PyMongo

logger = logging.getLogger(__name__)


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    Loads settings from the app config (MONGO_URI).
    """
    mongo = PyMongo()
    mongo.init_app(app)

    logger.info("MongoDB connection initialized for %s", app.config.get("MONGO_URI"))
    return mongo


def ensure_indexes(db):
    """Unique account keys; attendance is read sorted by timestamp."""
    db.users.create_index("username", unique=True)
    db.users.create_index("employerId", unique=True)
    db.attendances.create_index([("timestamp", 1)])
