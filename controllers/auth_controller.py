import logging

from flask import Blueprint

from models.users import User
from utils.errors import ValidationError
from utils.http import failure, missing_fields, request_fields, success
from utils.services import get_services

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")

REGISTER_FIELDS = ("name", "employerId", "username", "password")


# Login
@auth_bp.route("/login", methods=["POST"])
def login():
    fields = request_fields()
    username = fields.get("username")
    password = fields.get("password")

    if not username or not password:
        raise ValidationError("Username and password are required.")

    user = get_services().users.verify_password(username, password)
    if not user:
        return failure("Invalid username or password.", 401)

    return success(f"Welcome {user['name']}!", user={
        "name": user["name"],
        "employerId": user["employerId"],
    })


# Register
@auth_bp.route("/register", methods=["POST"])
def register():
    fields = request_fields()
    missing = missing_fields(fields, REGISTER_FIELDS)
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}.")

    user = User(
        name=str(fields["name"]).strip(),
        employer_id=str(fields["employerId"]).strip(),
        username=str(fields["username"]).strip(),
        password=fields["password"],
        job_title=fields.get("jobTitle"),
        contact_number=fields.get("contactNumber"),
        email=fields.get("email"),
    )
    get_services().users.register(user)

    logger.info("Registered user %s (%s)", user.username, user.employer_id)
    return success("Registration successful! You can now log in.", status=201)
