from __future__ import annotations

import re

from pharmacy_navi.core.taxonomy import (
    COL_ADDRESS,
    COL_LOCATION,
    COL_NAME,
    COL_REGION,
    COL_TAGS,
    COL_WEEKDAY_HOME,
    COL_WEEKDAY_OUTPATIENT,
    HOME_VISIT_SUFFIX,
    HOURS_PLACEHOLDERS,
    OPENING_HOURS_DAYS,
    OPENING_HOURS_MARKER,
    OUTPATIENT_SUFFIX,
    PHONE_HEADERS,
)
from pharmacy_navi.core.types import Record


_TAG_SEPARATORS = re.compile(r"[;／、]")
_WEEKDAY_SUFFIXED = re.compile(r"[月火水木金土日]曜(外来|在宅)")
_LONE_WEEKDAY = re.compile(r"^[月火水木金土日]曜$")
_PHONE_HEADER = re.compile(r"電話|TEL", re.IGNORECASE)
_PHONE_NUMBER = re.compile(r"0[0-9]{1,4}-[0-9]{1,4}-[0-9]{3,4}")
_WHITESPACE = re.compile(r"\s+")


def _cell(record: Record, *keys: str) -> str:
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def name_for(record: Record) -> str:
    return _cell(record, COL_NAME)


def region_for(record: Record) -> str:
    return _cell(record, COL_REGION)


def address_for(record: Record) -> str:
    return _cell(record, COL_ADDRESS, COL_LOCATION)


def parse_tag_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in _TAG_SEPARATORS.split(raw) if part.strip()]


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def tags_for(record: Record) -> list[str]:
    """Combined tags plus `<day>外来` / `<day>在宅` for each listed weekday."""
    tags = parse_tag_list(record.get(COL_TAGS))
    tags.extend(f"{day}{OUTPATIENT_SUFFIX}" for day in parse_tag_list(record.get(COL_WEEKDAY_OUTPATIENT)))
    tags.extend(f"{day}{HOME_VISIT_SUFFIX}" for day in parse_tag_list(record.get(COL_WEEKDAY_HOME)))
    return _dedupe(tags)


def display_tags_for(record: Record) -> list[str]:
    return [
        tag
        for tag in tags_for(record)
        if not _WEEKDAY_SUFFIXED.search(tag) and not _LONE_WEEKDAY.match(tag)
    ]


def _hours_column(headers: list[str], patterns: tuple[str, ...]) -> str | None:
    for header in headers:
        if OPENING_HOURS_MARKER not in header:
            continue
        if any(p in header for p in patterns):
            return header
    return None


def opening_hours_for(record: Record) -> str:
    """
    Build `月9:00-18:00 / 火9:00-18:00 / ...` from whichever opening-hours
    columns the sheet has. Headers are matched loosely by day name.
    """
    headers = list(record.keys())
    parts: list[str] = []
    for day in OPENING_HOURS_DAYS:
        column = _hours_column(headers, day.keywords)
        if column is None:
            continue
        value = (record.get(column) or "").strip()
        if not value or value in HOURS_PLACEHOLDERS:
            continue
        parts.append(f"{day.canonical}{_WHITESPACE.sub('', value)}")
    return " / ".join(parts)


def phone_for(record: Record) -> str:
    for key in PHONE_HEADERS:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()

    for key, value in record.items():
        if not _PHONE_HEADER.search(key) or not isinstance(value, str):
            continue
        match = _PHONE_NUMBER.search(value)
        if match:
            return match.group(0)

    for value in record.values():
        if not isinstance(value, str):
            continue
        match = _PHONE_NUMBER.search(value)
        if match:
            return match.group(0)

    return ""
