import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "eppi-attendance-dev-key"

    # MongoDB (Flask-PyMongo reads MONGO_URI)
    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017/AttendanceSystem")

    # Display date/time of every record is fixed in this zone at write time
    ORG_TIMEZONE = os.environ.get("ORG_TIMEZONE", "Asia/Dubai")
    ADMIN_EMPLOYER_ID = os.environ.get("ADMIN_EMPLOYER_ID", "EPPI-001")

    # Photo storage: "local" or "cloudinary"
    PHOTO_STORE = os.environ.get("PHOTO_STORE", "local")
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", os.path.join("static", "uploads"))
    CLOUDINARY_CLOUD_NAME = os.environ.get("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.environ.get("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.environ.get("CLOUDINARY_API_SECRET")
    CLOUDINARY_FOLDER = os.environ.get("CLOUDINARY_FOLDER", "eppi_attendance")

    # Notifications: "none", "smtp" or "brevo"
    NOTIFIER = os.environ.get("NOTIFIER", "none")
    EMAIL_USER = os.environ.get("EMAIL_USER")
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL")
    SMTP_HOST = os.environ.get("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.environ.get("SMTP_PORT", "587"))
    SMTP_PASSWORD = os.environ.get("SMTP_PASSWORD")
    BREVO_API_KEY = os.environ.get("BREVO_API_KEY")

    MAX_CONTENT_LENGTH = 5 * 1024 * 1024
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    MONGO_URI = "mongodb://localhost:27017/AttendanceSystemTest"
    PHOTO_STORE = "local"
    NOTIFIER = "none"
    ADMIN_EMPLOYER_ID = "EPPI-001"
    ORG_TIMEZONE = "Asia/Dubai"
