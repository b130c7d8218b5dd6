from datetime import datetime, timezone

from pymongo.errors import DuplicateKeyError, PyMongoError
from werkzeug.security import generate_password_hash, check_password_hash

from utils.errors import ConflictError, PersistenceError


class User:

    def __init__(self, name, employer_id, username, password, job_title=None,
                 contact_number=None, email=None, created_at=None):
        self.name = name
        self.employer_id = employer_id
        self.username = username
        self.password = generate_password_hash(password)
        self.job_title = job_title
        self.contact_number = contact_number
        self.email = email
        self.created_at = created_at or datetime.now(timezone.utc)

    # Convert to dictionary for MongoDB
    def to_dict(self):
        return {
            "name": self.name,
            "employerId": self.employer_id,
            "username": self.username,
            "password": self.password,
            "jobTitle": self.job_title,
            "contactNumber": self.contact_number,
            "email": self.email,
            "created_at": self.created_at,
        }


class UserStore:

    def __init__(self, collection):
        self.collection = collection

    def find_by_username(self, username):
        return self.collection.find_one({"username": username})

    # Save new user; username and employerId are unique
    def register(self, user):
        existing = self.collection.find_one(
            {"$or": [{"username": user.username}, {"employerId": user.employer_id}]}
        )
        if existing:
            raise ConflictError("Username or Employer ID already exists.")

        try:
            self.collection.insert_one(user.to_dict())
        except DuplicateKeyError as e:
            raise ConflictError("Username or Employer ID already exists.") from e
        except PyMongoError as e:
            raise PersistenceError("Server error during registration.") from e
        return user

    # Verify password
    def verify_password(self, username, password):
        user = self.find_by_username(username)
        if user and check_password_hash(user["password"], password):
            return user
        return None
