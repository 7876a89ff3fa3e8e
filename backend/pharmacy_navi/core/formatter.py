from __future__ import annotations

from pharmacy_navi.core.tags import address_for, display_tags_for, name_for, opening_hours_for, phone_for
from pharmacy_navi.core.types import Record


SHORTLIST_SIZE = 5


def _pharmacy_lines(record: Record, index: int, title: str) -> list[str]:
    lines = [f"【{index}】 {title}"]
    address = address_for(record)
    tel = phone_for(record)
    hours = opening_hours_for(record)
    services = " / ".join(display_tags_for(record))
    if address:
        lines.append(f"・住所：{address}")
    if tel:
        lines.append(f"・電話：{tel}")
    if hours:
        lines.append(f"・営業時間：{hours}")
    if services:
        lines.append(f"・サービス：{services}")
    return lines


def answer_for_single_pharmacy(record: Record, title: str) -> str:
    return "\n".join(_pharmacy_lines(record, 1, title))


def format_pharmacies_for_prompt(records: list[Record], limit: int = SHORTLIST_SIZE) -> str:
    """Render the first `limit` records as numbered blocks for the LLM prompt."""
    return "\n\n".join(
        "\n".join(_pharmacy_lines(record, idx, name_for(record)))
        for idx, record in enumerate(records[:limit], start=1)
    )
