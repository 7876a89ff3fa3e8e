from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pharmacy_navi.ai.prompts import SYSTEM_PROMPT, build_caution, build_intro, build_user_prompt
from pharmacy_navi.ai.providers.base import ChatMessage, ChatProvider
from pharmacy_navi.core.conditions import detect_chain_name
from pharmacy_navi.core.engine import search_pharmacies
from pharmacy_navi.core.formatter import SHORTLIST_SIZE, answer_for_single_pharmacy, format_pharmacies_for_prompt
from pharmacy_navi.core.tags import name_for
from pharmacy_navi.core.tokenizer import normalize_for_name_compare
from pharmacy_navi.core.types import Record, SearchResult


_logger = logging.getLogger(__name__)

DEFAULT_TITLE = "該当の薬局"
EMPTY_REPLY = "すみません、うまく回答を生成できませんでした。"


@dataclass(frozen=True)
class AnswerPlan:
    stage: str  # direct_name | chain_name | single_result | summary
    reply: str = ""
    user_prompt: str = ""
    total: int = 0
    search: SearchResult | None = None

    @property
    def needs_summary(self) -> bool:
        return self.stage == "summary"


@dataclass(frozen=True)
class NaviAnswer:
    reply: str
    stage: str
    total: int


def find_direct_match(records: list[Record], message: str) -> Record | None:
    """First record whose normalized name appears inside the normalized message."""
    normalized_message = normalize_for_name_compare(message)
    for record in records:
        name = name_for(record)
        if not name:
            continue
        normalized_name = normalize_for_name_compare(name)
        if normalized_name and normalized_name in normalized_message:
            return record
    return None


def find_chain_match(records: list[Record], message: str) -> tuple[Record | None, str | None]:
    chain_name = detect_chain_name(message)
    if not chain_name:
        return None, None
    matches = [r for r in records if chain_name in name_for(r)]
    if len(matches) == 1:
        return matches[0], chain_name
    return None, chain_name


def plan_answer(records: list[Record], message: str, *, shortlist_size: int = SHORTLIST_SIZE) -> AnswerPlan:
    direct = find_direct_match(records, message)
    if direct is not None:
        reply = answer_for_single_pharmacy(direct, name_for(direct) or DEFAULT_TITLE)
        return AnswerPlan(stage="direct_name", reply=reply, total=1)

    chain_row, chain_name = find_chain_match(records, message)
    if chain_row is not None:
        reply = answer_for_single_pharmacy(chain_row, name_for(chain_row) or chain_name or DEFAULT_TITLE)
        return AnswerPlan(stage="chain_name", reply=reply, total=1)

    search = search_pharmacies(records, message)
    if len(search) == 1:
        row = search.result[0]
        reply = answer_for_single_pharmacy(row, name_for(row) or DEFAULT_TITLE)
        return AnswerPlan(stage="single_result", reply=reply, total=1, search=search)

    total = len(search)
    area_word = search.free_words[0] if search.free_words else ""
    user_prompt = build_user_prompt(
        message,
        build_intro(total, area_word, shortlist_size),
        format_pharmacies_for_prompt(search.result, limit=shortlist_size),
        build_caution(search),
    )
    return AnswerPlan(stage="summary", user_prompt=user_prompt, total=total, search=search)


async def answer_message(
    records: list[Record],
    message: str,
    *,
    load_provider: Callable[[], ChatProvider],
    shortlist_size: int = SHORTLIST_SIZE,
) -> NaviAnswer:
    plan = plan_answer(records, message, shortlist_size=shortlist_size)
    _logger.info("navi answer stage=%s total=%s records=%s", plan.stage, plan.total, len(records))
    if not plan.needs_summary:
        return NaviAnswer(reply=plan.reply, stage=plan.stage, total=plan.total)

    # Only the summary stage resolves a provider.
    content = await load_provider().chat(
        [
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=plan.user_prompt),
        ]
    )
    return NaviAnswer(reply=(content or "").strip() or EMPTY_REPLY, stage=plan.stage, total=plan.total)
