from flask import current_app

EXTENSION_KEY = "attendance_services"


class Services:
    """Clients built once at startup and shared by the request handlers."""

    def __init__(self, attendance, users, leaves, photo_store, notifier):
        self.attendance = attendance
        self.users = users
        self.leaves = leaves
        self.photo_store = photo_store
        self.notifier = notifier


def register_services(app, services):
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services():
    return current_app.extensions[EXTENSION_KEY]
