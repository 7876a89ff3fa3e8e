from __future__ import annotations

from typing import Iterator

from pharmacy_navi.core.types import Record


def _require_text(text: object) -> str:
    if not isinstance(text, str):
        raise TypeError(f"CSV text must be str, got {type(text).__name__}")
    return text


def iter_csv_rows(text: str) -> Iterator[list[str]]:
    """
    Scan CSV text one character at a time and yield raw rows.

    - `,` separates fields outside quotes
    - `"` toggles quoting; `""` inside quotes is a literal quote
    - `\\n`, `\\r\\n` and bare `\\r` end a row outside quotes
    - newlines inside quotes are kept verbatim
    - an entirely empty line yields nothing
    """
    text = _require_text(text)
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    i = 0
    size = len(text)

    while i < size:
        ch = text[i]

        if ch == '"':
            if in_quotes and i + 1 < size and text[i + 1] == '"':
                field.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
            i += 1
            continue

        if ch == "," and not in_quotes:
            row.append("".join(field))
            field = []
            i += 1
            continue

        if ch in "\r\n" and not in_quotes:
            if ch == "\n" and i > 0 and text[i - 1] == "\r":
                i += 1
                continue
            row.append("".join(field))
            field = []
            if len(row) > 1 or row[0] != "":
                yield row
            row = []
            i += 1
            continue

        field.append(ch)
        i += 1

    if field or row:
        row.append("".join(field))
        yield row


def _clean_header(value: str) -> str:
    cleaned = value.strip()
    if cleaned.startswith('"'):
        cleaned = cleaned[1:]
    if cleaned.endswith('"'):
        cleaned = cleaned[:-1]
    return cleaned


def parse_csv(text: str) -> list[Record]:
    """Parse a CSV export into records keyed by the header row."""
    rows = iter_csv_rows(text)
    header_row = next(rows, None)
    if header_row is None:
        return []

    headers = [_clean_header(h) for h in header_row]
    records: list[Record] = []
    for cols in rows:
        record: Record = {}
        for idx, header in enumerate(headers):
            record[header] = cols[idx].strip() if idx < len(cols) else ""
        records.append(record)
    return records
