import logging

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from utils.errors import PersistenceError
from utils.timefmt import format_display, utc_now

logger = logging.getLogger(__name__)


class Attendance:

    REQUIRED = ("employerId", "loggerName", "timestamp", "photoUrl")

    def __init__(self, employer_id, logger_name, timestamp, date, time, photo_url,
                 photo_path=None, client_timestamp=None):
        self.employer_id = employer_id
        self.logger_name = logger_name
        self.timestamp = timestamp
        self.date = date
        self.time = time
        self.photo_url = photo_url
        self.photo_path = photo_path
        self.client_timestamp = client_timestamp  # advisory only

    def to_dict(self):
        return {
            "employerId": self.employer_id,
            "loggerName": self.logger_name,
            "timestamp": self.timestamp,
            "date": self.date,
            "time": self.time,
            "photoPath": self.photo_path,
            "photoUrl": self.photo_url,
            "clientTimestamp": self.client_timestamp,
        }

    @classmethod
    def from_dict(cls, doc):
        return cls(
            employer_id=doc.get("employerId"),
            logger_name=doc.get("loggerName"),
            timestamp=doc.get("timestamp"),
            date=doc.get("date"),
            time=doc.get("time"),
            photo_url=doc.get("photoUrl"),
            photo_path=doc.get("photoPath"),
            client_timestamp=doc.get("clientTimestamp"),
        )

    def summary(self):
        """The fields the capture client displays."""
        return {"photoUrl": self.photo_url, "date": self.date, "time": self.time}


class AttendanceStore:
    """Append-only attendance records; no update or delete."""

    def __init__(self, collection, tz, clock=utc_now):
        self.collection = collection
        self.tz = tz
        self.clock = clock

    def create(self, employer_id, logger_name, photo, client_timestamp=None, now=None):
        now = now or self.clock()
        date_str, time_str = format_display(now, self.tz)

        record = Attendance(
            employer_id=employer_id,
            logger_name=logger_name,
            timestamp=now,
            date=date_str,
            time=time_str,
            photo_url=photo.url,
            photo_path=photo.handle,
            client_timestamp=client_timestamp,
        )
        doc = record.to_dict()

        missing = [field for field in Attendance.REQUIRED if not doc.get(field)]
        if missing:
            raise PersistenceError(f"Attendance record is missing {', '.join(missing)}.")

        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.exception("Attendance insert for %s failed", employer_id)
            raise PersistenceError() from e

        return record

    def list(self):
        """All records, oldest first; equal timestamps keep insertion order."""
        try:
            cursor = self.collection.find({}).sort([("timestamp", ASCENDING), ("_id", ASCENDING)])
            return [Attendance.from_dict(doc) for doc in cursor]
        except PyMongoError as e:
            logger.exception("Reading attendance records failed")
            raise PersistenceError("Could not read attendance records.") from e
