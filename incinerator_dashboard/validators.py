"""
Field validation for records before they are saved.

Returns a list of ValidationError (empty when valid) instead of raising, so
the data-input page can show every problem at once. Messages are in
Traditional Chinese to match the operator forms.
"""

import re

from .config import DOWNTIME_TYPES, FIELD_DISPLAY_NAMES, OPTIONAL_FIELDS, PLANT_BY_NAME, PLANT_NAMES
from .models import DowntimeRecord, OperationalRecord, ValidationError

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_NON_NEGATIVE_TONNAGES = ("total_intake", "incineration_amount", "pit_storage")


def _required(field_name: str) -> ValidationError:
    return ValidationError(field_name, f"{FIELD_DISPLAY_NAMES[field_name]}為必填欄位")


def validate_record(record: OperationalRecord) -> list[ValidationError]:
    errors = []

    if not record.date:
        errors.append(_required("date"))
    elif not _ISO_DATE_RE.match(record.date):
        errors.append(ValidationError("date", "日期格式不正確 (應為 YYYY-MM-DD)"))

    if not record.plant_name:
        errors.append(_required("plant_name"))
    elif record.plant_name not in PLANT_NAMES:
        errors.append(ValidationError("plant_name", "廠區名稱不正確"))

    if record.furnace_count is None:
        errors.append(_required("furnace_count"))
    elif record.furnace_count < 0:
        errors.append(ValidationError("furnace_count", "爐數不可為負數"))
    elif float(record.furnace_count) != int(record.furnace_count):
        errors.append(ValidationError("furnace_count", "爐數必須為整數"))

    for field_name in _NON_NEGATIVE_TONNAGES:
        value = getattr(record, field_name)
        if value is None:
            errors.append(_required(field_name))
        elif value < 0:
            errors.append(ValidationError(field_name, f"{FIELD_DISPLAY_NAMES[field_name]}不可為負數"))

    if record.pit_capacity is None:
        errors.append(_required("pit_capacity"))
    elif record.pit_capacity <= 0:
        errors.append(ValidationError("pit_capacity", "貯坑容量必須大於 0"))

    # Storage may exceed capacity.

    for field_name in OPTIONAL_FIELDS:
        value = getattr(record, field_name)
        if value is not None and value < 0:
            errors.append(ValidationError(field_name, f"{FIELD_DISPLAY_NAMES[field_name]}不可為負數"))

    return errors


def validate_date_range(start_date: str | None, end_date: str | None) -> list[ValidationError]:
    errors = []

    if start_date and not _ISO_DATE_RE.match(start_date):
        errors.append(ValidationError("start_date", "開始日期格式不正確"))
    if end_date and not _ISO_DATE_RE.match(end_date):
        errors.append(ValidationError("end_date", "結束日期格式不正確"))
    if not errors and start_date and end_date and start_date > end_date:
        errors.append(ValidationError("date_range", "開始日期不可晚於結束日期"))

    return errors


def validate_downtime(record: DowntimeRecord) -> list[ValidationError]:
    """Check a furnace downtime entry before it is saved.

    The furnace number must exist at the plant and the outage must not end
    before it starts.
    """
    errors = []

    plant = PLANT_BY_NAME.get(record.plant_name)
    if plant is None:
        errors.append(ValidationError("plant_name", "廠區名稱不正確"))
    elif not 1 <= record.furnace_number <= plant.max_furnaces:
        errors.append(ValidationError("furnace_number", f"{plant.name}僅有 {plant.max_furnaces} 座焚化爐"))

    if record.downtime_type not in DOWNTIME_TYPES:
        errors.append(ValidationError("downtime_type", "停機類型不正確"))

    if record.start is None or record.end is None:
        errors.append(ValidationError("start", "請填寫開始與結束時間"))
    elif record.end < record.start:
        errors.append(ValidationError("end", "結束時間不可早於開始時間"))

    return errors


def format_validation_errors(errors: list[ValidationError]) -> str:
    return "\n".join(error.message for error in errors)
