from __future__ import annotations

import re

from pharmacy_navi.core.taxonomy import DRUGSTORE_KEYWORDS, SERVICE_TAGS, WEEKDAY_TAGS
from pharmacy_navi.core.tokenizer import tokenize_query
from pharmacy_navi.core.types import ConditionSet


_CHAIN_NAME = re.compile(r"(.+?薬局)")


def detect_weekday(word: str) -> str | None:
    for weekday in WEEKDAY_TAGS:
        if any(kw in word for kw in weekday.keywords):
            return weekday.canonical
    return None


def detect_service_tag(word: str) -> str | None:
    for svc in SERVICE_TAGS:
        if any(kw in word for kw in svc.keywords):
            return svc.canonical
    return None


def detect_chain_name(text: str) -> str | None:
    """Pick out `○○薬局` from text like `○○薬局△△店について`."""
    match = _CHAIN_NAME.search(text or "")
    if not match:
        return None
    return match.group(1).strip() or None


def _is_drugstore_word(word: str) -> bool:
    return any(kw in word for kw in DRUGSTORE_KEYWORDS)


def extract_conditions(query: str) -> ConditionSet:
    requested_tags: list[str] = []
    weekday_tags: list[str] = []
    free_words: list[str] = []
    drugstore_only = False

    for word in tokenize_query(query):
        weekday = detect_weekday(word)
        if weekday:
            if weekday not in weekday_tags:
                weekday_tags.append(weekday)
            continue

        if _is_drugstore_word(word):
            drugstore_only = True
            continue

        tag = detect_service_tag(word)
        if tag:
            if tag not in requested_tags:
                requested_tags.append(tag)
            continue

        free_words.append(word)

    return ConditionSet(
        requested_tags=tuple(requested_tags),
        weekday_tags=tuple(weekday_tags),
        free_words=tuple(free_words),
        drugstore_only=drugstore_only,
    )
