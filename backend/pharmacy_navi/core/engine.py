from __future__ import annotations

import unicodedata

from pharmacy_navi.core.conditions import extract_conditions
from pharmacy_navi.core.tags import address_for, name_for, region_for, tags_for
from pharmacy_navi.core.taxonomy import (
    COL_WEEKDAY_HOME,
    COL_WEEKDAY_OUTPATIENT,
    DRUGSTORE_CHAINS,
    HOME_VISIT_TAG,
)
from pharmacy_navi.core.types import Record, SearchResult


def _char_weight(ch: str) -> tuple:
    # Shift_JIS bytes follow JIS X 0208: kana, then level-1 kanji by reading, then level-2.
    try:
        return (0, ch.encode("cp932"))
    except UnicodeEncodeError:
        return (1, ord(ch))


def collation_key(value: str) -> tuple:
    """
    Sort key following Japanese collation: width-folded (NFKC), katakana
    folded onto hiragana, case-folded, then compared in JIS X 0208 order.
    """
    normalized = unicodedata.normalize("NFKC", value or "")
    # ヴヵヶ stay katakana; their hiragana forms are outside JIS X 0208.
    folded = "".join(chr(ord(ch) - 0x60) if "ァ" <= ch <= "ン" else ch for ch in normalized)
    return tuple(_char_weight(ch) for ch in folded.casefold())


def _haystack(record: Record) -> str:
    return f"{region_for(record)} {address_for(record)} {name_for(record)}"


def _filter_by_words(records: list[Record], words: list[str]) -> list[Record]:
    if not words:
        return list(records)
    return [r for r in records if all(w and w in _haystack(r) for w in words)]


def _filter_by_location(records: list[Record], free_words: list[str]) -> list[Record]:
    filtered = _filter_by_words(records, free_words)
    if filtered or not free_words:
        return filtered
    # Nothing matched every word: fall back to the first word alone.
    return _filter_by_words(records, free_words[:1])


def _filter_by_tags(records: list[Record], requested_tags: tuple[str, ...]) -> list[Record]:
    if not requested_tags:
        return records
    out = []
    for record in records:
        tags = set(tags_for(record))
        if all(tag in tags for tag in requested_tags):
            out.append(record)
    return out


def _filter_by_weekdays(records: list[Record], weekday_tags: tuple[str, ...], *, home_visit: bool) -> list[Record]:
    if not weekday_tags:
        return records
    column = COL_WEEKDAY_HOME if home_visit else COL_WEEKDAY_OUTPATIENT
    return [r for r in records if all(wd in (r.get(column) or "") for wd in weekday_tags)]


def _filter_drugstores(records: list[Record]) -> list[Record]:
    return [r for r in records if any(chain in name_for(r) for chain in DRUGSTORE_CHAINS)]


def sort_records(records: list[Record]) -> list[Record]:
    return sorted(records, key=lambda r: (collation_key(region_for(r)), collation_key(name_for(r))))


def search_pharmacies(records: list[Record], query: str) -> SearchResult:
    """
    Filter records by the conditions found in `query`:

    1. location words (region / address / name), relaxed to the first word on zero hits
    2. service tags, all required
    3. weekdays, against the home-visit column when 在宅 was asked for
    4. drugstore chains, when a drugstore word was used

    then sort by region and name.
    """
    conditions = extract_conditions(query)

    filtered = _filter_by_location(records, list(conditions.free_words))
    filtered = _filter_by_tags(filtered, conditions.requested_tags)
    filtered = _filter_by_weekdays(
        filtered,
        conditions.weekday_tags,
        home_visit=HOME_VISIT_TAG in conditions.requested_tags,
    )
    if conditions.drugstore_only:
        filtered = _filter_drugstores(filtered)

    return SearchResult(result=sort_records(filtered), conditions=conditions)
