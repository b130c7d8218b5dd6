import io

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

COLUMNS = [
    ("Date", 15),
    ("Time", 15),
    ("Logger Name", 25),
    ("Employer ID", 20),
    ("Photo URL", 60),
]


def build_attendance_workbook(records):
    """Spreadsheet of attendance records, in the order given."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Attendance Report"

    ws.append([header for header, _ in COLUMNS])
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for idx, (_, width) in enumerate(COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    for record in records:
        ws.append([
            record.date,
            record.time,
            record.logger_name,
            record.employer_id,
            record.photo_url,
        ])

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output