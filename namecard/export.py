"""
Spreadsheet row hand-off.

Rows follow the fixed column order of the contacts sheet: a timestamp
column, then the seven record fields.
"""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from zoneinfo import ZoneInfo

from .parser import BusinessCardRecord

logger = logging.getLogger(__name__)

SHEET_HEADER = ["날짜", "이름", "회사명", "직책", "이메일", "전화번호", "주소", "웹사이트"]
SHEET_FIELDS = ["name", "company", "position", "email", "phone", "address", "website"]
SHEET_TIMEZONE = "Asia/Seoul"

EMAIL_COLUMN = SHEET_HEADER.index("이메일")
PHONE_COLUMN = SHEET_HEADER.index("전화번호")

RecordLike = Union[BusinessCardRecord, Mapping[str, Any]]


def _as_dict(record: RecordLike) -> Dict[str, Any]:
    if isinstance(record, BusinessCardRecord):
        return record.to_dict()
    return dict(record)


@lru_cache(maxsize=None)
def sheet_zone() -> ZoneInfo:
    return ZoneInfo(SHEET_TIMEZONE)


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a time the way Korean spreadsheets show it ("2024. 1. 15. 오후 3:05:09")."""
    zone = sheet_zone()
    moment = (moment or datetime.now(zone)).astimezone(zone)
    meridiem = "오전" if moment.hour < 12 else "오후"
    hour = moment.hour % 12 or 12
    return f"{moment.year}. {moment.month}. {moment.day}. {meridiem} {hour}:{moment.minute:02d}:{moment.second:02d}"


def to_sheet_row(record: RecordLike, timestamp: Optional[datetime] = None) -> List[str]:
    """
    Build one sheet row for a record.

    Args:
        record: Extracted (and possibly user-corrected) record or dict
        timestamp: Time of the hand-off; now in Asia/Seoul by default

    Returns:
        Row values in SHEET_HEADER order
    """
    data = _as_dict(record)
    return [format_timestamp(timestamp)] + [str(data.get(field) or "") for field in SHEET_FIELDS]


def _cell(row: Sequence[Any], column: int) -> str:
    return str(row[column]).strip() if column < len(row) and row[column] is not None else ""


def find_duplicate(record: RecordLike, rows: Sequence[Sequence[Any]]) -> Optional[Dict[str, Any]]:
    """
    Look for an existing sheet row with the same phone or email.

    Phones must match exactly after trimming; emails match case-insensitively.
    ``rows`` is the sheet as read, header row first.

    Returns:
        ``{"row_index": n, "data": {...}}`` with the 1-based sheet row
        number (header included), or None
    """
    data = _as_dict(record)
    phone = str(data.get("phone") or "").strip()
    email = str(data.get("email") or "").strip().lower()

    if not phone and not email:
        return None

    for i, row in enumerate(rows):
        if i == 0:
            continue
        phone_match = phone and _cell(row, PHONE_COLUMN) == phone
        email_match = email and _cell(row, EMAIL_COLUMN).lower() == email
        if phone_match or email_match:
            logger.info(f"Duplicate of sheet row {i + 1}")
            return {
                "row_index": i + 1,
                "data": {field: _cell(row, column) for column, field in enumerate(SHEET_FIELDS, start=1)},
            }

    return None
