from __future__ import annotations

import re

from pharmacy_navi.core.taxonomy import (
    ADMIN_SUFFIXES,
    AREA_SUFFIXES,
    GENERIC_WORDS,
    KEEP_WORDS,
    NOISE_WORDS,
    OPEN_NOW_PHRASES,
    PARTICLES,
    PUNCTUATION,
    STOP_PHRASES,
)


_KEEP_PATTERN = re.compile("|".join(sorted(KEEP_WORDS, key=len, reverse=True)))
_PUNCTUATION_PATTERN = re.compile(f"[{re.escape(PUNCTUATION)}]")
_PARTICLE_PATTERN = re.compile(f"[{PARTICLES}]")
_AREA_SUFFIX_PATTERN = re.compile(f"({'|'.join(AREA_SUFFIXES)})$")
_ADMIN_SUFFIX_PATTERN = re.compile(f"({'|'.join(ADMIN_SUFFIXES)})$")
_WHITESPACE = re.compile(r"\s+")


def _replace_all(text: str, phrases: tuple[str, ...], replacement: str) -> str:
    for phrase in phrases:
        text = text.replace(phrase, replacement)
    return text


def tokenize_query(query: str) -> list[str]:
    if not isinstance(query, str):
        raise TypeError(f"query must be str, got {type(query).__name__}")

    # Weekday words get their own token so phrase/particle removal cannot split them.
    q = _KEEP_PATTERN.sub(lambda m: f" {m.group(0)} ", query)
    q = _replace_all(q, STOP_PHRASES, " ")
    q = _PUNCTUATION_PATTERN.sub(" ", q)
    q = _PARTICLE_PATTERN.sub(" ", q)
    # NOTE: substring removal, so a place name containing 店 or 薬 loses that character too.
    q = _replace_all(q, GENERIC_WORDS, " ")

    raw_words = [_AREA_SUFFIX_PATTERN.sub("", w) for w in _WHITESPACE.split(q)]
    raw_words = [w for w in raw_words if w]

    words = [_ADMIN_SUFFIX_PATTERN.sub("", w) for w in raw_words if w not in NOISE_WORDS]
    return [w for w in words if w]


def normalize_for_name_compare(text: str) -> str:
    """Strip request phrasing, generic nouns and whitespace for name comparison."""
    s = _replace_all(text or "", STOP_PHRASES, "")
    s = _replace_all(s, OPEN_NOW_PHRASES, "")
    s = _replace_all(s, GENERIC_WORDS, "")
    return _WHITESPACE.sub("", s).strip()
