"""
utils/photo_store.py
---------------------
Durable storage for captured attendance photos.

Two backends share one contract:
    store(buffer, suggested_name) -> StoredPhoto(url, handle)
    delete(handle)

LocalPhotoStore writes to the upload folder and the app serves the file at
/uploads/<name>. CloudinaryPhotoStore pushes the image to Cloudinary and
returns its public secure_url. A name collision overwrites the older photo.
"""

import io
import logging
import os
from collections import namedtuple

import cloudinary.uploader
from werkzeug.utils import secure_filename

from utils.errors import StoreError

logger = logging.getLogger(__name__)

StoredPhoto = namedtuple("StoredPhoto", ["url", "handle"])


def photo_name(employer_id, epoch_millis):
    """{employerId}_{captureEpochMillis}, safe for paths and public ids."""
    return secure_filename(f"{employer_id}_{epoch_millis}")


class PhotoStore:

    def store(self, buffer, suggested_name):
        raise NotImplementedError

    def delete(self, handle):
        raise NotImplementedError


# -------------------------------------------------------------
# LOCAL FILESYSTEM
# -------------------------------------------------------------
class LocalPhotoStore(PhotoStore):
    extension = ".jpeg"

    def __init__(self, folder, url_builder):
        self.folder = folder
        self.url_builder = url_builder

    def path_for(self, filename):
        return os.path.join(self.folder, filename)

    def store(self, buffer, suggested_name):
        filename = secure_filename(suggested_name) + self.extension
        try:
            os.makedirs(self.folder, exist_ok=True)
            with open(self.path_for(filename), "wb") as fh:
                fh.write(buffer)
        except OSError as e:
            logger.exception("Writing photo %s failed", filename)
            raise StoreError(f"Could not save photo: {e.strerror or e}") from e

        return StoredPhoto(url=self.url_builder(filename), handle=filename)

    def delete(self, handle):
        try:
            os.remove(self.path_for(secure_filename(handle)))
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StoreError(f"Could not delete photo {handle}: {e}") from e


# -------------------------------------------------------------
# CLOUDINARY
# -------------------------------------------------------------
class CloudinaryPhotoStore(PhotoStore):

    def __init__(self, cloud_name, api_key, api_secret, folder="eppi_attendance", uploader=None):
        if not (cloud_name and api_key and api_secret):
            raise StoreError("Cloudinary credentials are not configured.")
        self.credentials = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
            "secure": True,
        }
        self.folder = folder
        self.uploader = uploader or cloudinary.uploader

    def store(self, buffer, suggested_name):
        try:
            result = self.uploader.upload(
                io.BytesIO(buffer),
                folder=self.folder,
                public_id=secure_filename(suggested_name),
                resource_type="image",
                overwrite=True,
                **self.credentials,
            )
        except Exception as e:
            logger.exception("Cloudinary upload of %s failed", suggested_name)
            raise StoreError(f"Photo upload failed: {e}") from e

        url = result.get("secure_url")
        if not url:
            raise StoreError("Photo upload returned no URL.")
        return StoredPhoto(url=url, handle=result.get("public_id"))

    def delete(self, handle):
        try:
            self.uploader.destroy(handle, resource_type="image", **self.credentials)
        except Exception as e:
            raise StoreError(f"Could not delete photo {handle}: {e}") from e


def build_photo_store(config, url_builder):
    """Pick the backend named by PHOTO_STORE."""
    kind = (config.get("PHOTO_STORE") or "local").lower()

    if kind == "local":
        return LocalPhotoStore(config["UPLOAD_FOLDER"], url_builder)
    if kind == "cloudinary":
        return CloudinaryPhotoStore(
            config.get("CLOUDINARY_CLOUD_NAME"),
            config.get("CLOUDINARY_API_KEY"),
            config.get("CLOUDINARY_API_SECRET"),
            folder=config.get("CLOUDINARY_FOLDER", "eppi_attendance"),
        )
    raise ValueError(f"Unknown PHOTO_STORE: {kind}")
