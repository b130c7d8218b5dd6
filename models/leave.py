from datetime import datetime, timezone

from pymongo.errors import PyMongoError

from utils.errors import PersistenceError


class LeaveRequest:

    def __init__(self, employer_id, logger_name, leave_type, start_date, end_date,
                 reason, status="Pending", submitted_at=None):
        self.employer_id = employer_id
        self.logger_name = logger_name
        self.leave_type = leave_type  # "Annual", "Sick", ...
        self.start_date = start_date
        self.end_date = end_date
        self.reason = reason
        self.status = status  # Pending | Approved | Rejected
        self.submitted_at = submitted_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            "employerId": self.employer_id,
            "loggerName": self.logger_name,
            "leaveType": self.leave_type,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "reason": self.reason,
            "status": self.status,
            "submittedAt": self.submitted_at,
        }


class LeaveStore:

    def __init__(self, collection):
        self.collection = collection

    def create(self, leave):
        try:
            self.collection.insert_one(leave.to_dict())
        except PyMongoError as e:
            raise PersistenceError("Server error during leave submission.") from e
        return leave
