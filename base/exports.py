# base/exports.py
"""
Spreadsheet downloads of list pages.

xlsx (openpyxl) by default, ?format=csv for a UTF-8 CSV with BOM.
File names follow <title>_<YYYY-MM-DD>.
"""
import csv
import io
from datetime import date, datetime

from django.http import HttpResponse
from django.utils import timezone
from django.utils.http import content_disposition_header
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
COLUMN_WIDTH = 15

header_font = Font(bold=True, color="FFFFFF")
header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
header_alignment = Alignment(horizontal="center", vertical="center")


def local_day(value):
    """Datetimes become local calendar days; Excel cells cannot carry a timezone."""
    if isinstance(value, datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    return value


def export_filename(title: str, extension: str) -> str:
    return f"{title}_{timezone.localdate():%Y-%m-%d}.{extension}"


def build_workbook(header, rows, sheet_name: str) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    ws.append(list(header))
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment

    for row in rows:
        ws.append([local_day(value) for value in row])
        for cell in ws[ws.max_row]:
            if isinstance(cell.value, date):
                cell.number_format = "yyyy-mm-dd"

    for col in range(1, len(header) + 1):
        ws.column_dimensions[get_column_letter(col)].width = COLUMN_WIDTH
    ws.freeze_panes = "A2"
    return wb


def xlsx_response(title: str, header, rows) -> HttpResponse:
    output = io.BytesIO()
    build_workbook(header, rows, sheet_name=title).save(output)
    response = HttpResponse(output.getvalue(), content_type=XLSX_CONTENT_TYPE)
    response["Content-Disposition"] = content_disposition_header(True, export_filename(title, "xlsx"))
    return response


def csv_response(title: str, header, rows) -> HttpResponse:
    response = HttpResponse(content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = content_disposition_header(True, export_filename(title, "csv"))
    # BOM so spreadsheet tools pick UTF-8 for the Chinese headers
    response.write("\ufeff")
    writer = csv.writer(response)
    writer.writerow(header)
    for row in rows:
        writer.writerow([local_day(value) for value in row])
    return response


def export_response(request, title: str, header, rows) -> HttpResponse:
    if request.GET.get("format") == "csv":
        return csv_response(title, header, rows)
    return xlsx_response(title, header, rows)
