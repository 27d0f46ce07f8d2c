"""Parsing of PDF date strings (ISO 32000-1, section 7.9.4)."""

import re
from datetime import datetime, timedelta, timezone

# D:YYYYMMDDHHmmSSOHH'mm' where every component after the year is optional.
_PDF_DATE_RE = re.compile(
    r"""
    ^(?:D:)?
    (?P<year>\d{4})
    (?P<month>\d{2})?
    (?P<day>\d{2})?
    (?P<hour>\d{2})?
    (?P<minute>\d{2})?
    (?P<second>\d{2})?
    (?:
        (?P<tz_sign>[+\-Z])
        (?:(?P<tz_hour>\d{2})'?(?:(?P<tz_minute>\d{2})'?)?)?
    )?
    $
    """,
    re.VERBOSE,
)


def parse_pdf_date(raw: str | None) -> datetime | None:
    """Parse a PDF date string into a timezone-aware datetime.

    Missing components default to their lowest value and a missing offset is
    treated as UTC. Returns None for empty or malformed input.
    """
    if not raw:
        return None
    match = _PDF_DATE_RE.match(raw.strip())
    if match is None:
        return None

    parts = match.groupdict()
    try:
        naive = datetime(
            int(parts["year"]),
            int(parts["month"] or 1),
            int(parts["day"] or 1),
            int(parts["hour"] or 0),
            int(parts["minute"] or 0),
            int(parts["second"] or 0),
        )
        return naive.replace(tzinfo=_parse_offset(parts))
    except ValueError:
        return None


def _parse_offset(parts: dict[str, str | None]) -> timezone:
    sign = parts["tz_sign"]
    if sign in (None, "Z"):
        return timezone.utc
    offset = timedelta(
        hours=int(parts["tz_hour"] or 0),
        minutes=int(parts["tz_minute"] or 0),
    )
    return timezone(-offset if sign == "-" else offset)
