import logging
from functools import wraps

from flask import current_app, request

from utils.errors import AccessDeniedError

logger = logging.getLogger(__name__)


# This decorator makes sure that only the administrator identity can reach a route
def admin_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        requester_id = request.args.get("employerId")
        admin_id = current_app.config["ADMIN_EMPLOYER_ID"]

        if not requester_id or requester_id != admin_id:
            logger.warning("Access denied for ID: %s", requester_id)
            raise AccessDeniedError(
                f"Access Denied: Only the Admin User ({admin_id}) can download this report."
            )
        return view_function(*args, **kwargs)
    return decorated_function
