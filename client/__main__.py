"""
Run one attendance capture from the command line.

    python -m client --employer-id EPPI-007 --name "Jane Doe"
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from .cache_mirror import LocalCacheMirror
from .camera import OpenCVCamera
from .capture import CaptureClient
from .errors import ClientError


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(description="Mark attendance with a camera photo.")
    parser.add_argument("--server", default=os.environ.get("ATTENDANCE_SERVER_URL", "http://localhost:5000"))
    parser.add_argument("--employer-id", default=os.environ.get("EPPI_EMPLOYER_ID"))
    parser.add_argument("--name", default=os.environ.get("EPPI_USER_NAME"))
    parser.add_argument("--camera", type=int, default=int(os.environ.get("CAMERA_INDEX", "0")))
    parser.add_argument("--cache-file", default=os.environ.get(
        "ATTENDANCE_CACHE_FILE", os.path.join(os.path.expanduser("~"), ".eppi_attendance.json")))
    parser.add_argument("--show-last", action="store_true", help="print the last saved attendance and exit")
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"),
                        format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    cache = LocalCacheMirror(args.cache_file)
    if args.show_last:
        last = cache.get()
        print(f"Last attendance: {last.date} {last.time}" if last else "No attendance recorded on this device.")
        return 0

    if not args.employer_id or not args.name:
        parser.error("--employer-id and --name are required (or EPPI_EMPLOYER_ID / EPPI_USER_NAME)")

    client = CaptureClient(args.server, args.employer_id, args.name, cache,
                           camera_factory=lambda: OpenCVCamera(args.camera))
    with client:
        try:
            client.start_camera()
            record = client.capture_and_submit()
        except ClientError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    print(f"Attendance saved! {record['date']} {record['time']}")
    print(f"Photo: {record.get('photoUrl')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
