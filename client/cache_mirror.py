import json
import logging
import os
from collections import namedtuple

logger = logging.getLogger(__name__)

CachedAttendance = namedtuple("CachedAttendance", ["date", "time"])


class LocalCacheMirror:
    """
    Last successful attendance (date, time) on this device, kept in a small
    JSON file so the dashboard can show it right after a restart. The server
    record stays the source of truth.
    """

    def __init__(self, path):
        self.path = path

    def set(self, date, time):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump({"date": date, "time": time}, fh)
        os.replace(tmp_path, self.path)

    def get(self):
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable attendance cache %s: %s", self.path, e)
            return None

        if not isinstance(data, dict) or not data.get("date") or not data.get("time"):
            return None
        return CachedAttendance(data["date"], data["time"])
