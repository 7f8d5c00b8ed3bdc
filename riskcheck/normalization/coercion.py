"""Total conversions from untrusted JSON-ish values to canonical field types.

None of these raise: malformed input degrades to the type's zero value.
"""

import math
from collections.abc import Mapping
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import urlparse

from riskcheck.normalization.models import PageStatus

_EXTRA_DATE_FORMATS = ("%Y/%m/%d %H:%M:%S", "%Y/%m/%d", "%d.%m.%Y", "%B %d, %Y")


def as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_bool(value: Any) -> bool:
    # Strict: "yes", 1 and friends are not evidence of a detected signal.
    return value is True


def as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        return int(number) if math.isfinite(number) else 0
    return 0


def string_set(value: Any) -> tuple[str, ...]:
    """Trim, drop empties, deduplicate and sort ascending."""
    cleaned = {as_str(item).strip() for item in as_list(value)}
    cleaned.discard("")
    return tuple(sorted(cleaned))


def page_list(value: Any) -> tuple[PageStatus, ...]:
    """Normalize page entries to ``PageStatus`` sorted by url, then status."""
    pages: list[PageStatus] = []
    for entry in as_list(value):
        if isinstance(entry, str):
            url, status = entry, 0
        else:
            record = as_mapping(entry)
            url, status = as_str(record.get("url")), as_int(record.get("status"))
        url = url.strip()
        if url:
            pages.append(PageStatus(url=url, status=status))
    return tuple(sorted(pages))


def hostname_of(url: str) -> str:
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. ``2025-01-10T12:00:00.000Z``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def timestamp(value: Any) -> str:
    """Canonicalize epoch milliseconds and date-like strings.

    Values that cannot be interpreted as a moment are passed through as text.
    """
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return as_str(value)
        try:
            return format_timestamp(
                datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            )
        except (OverflowError, OSError, ValueError):
            return as_str(value)
    if not isinstance(value, str):
        return as_str(value)
    text = value.strip()
    if not text:
        return ""
    parsed = _parse_date_string(text)
    return format_timestamp(parsed) if parsed is not None else value


def _parse_date_string(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass
    for fmt in _EXTRA_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
