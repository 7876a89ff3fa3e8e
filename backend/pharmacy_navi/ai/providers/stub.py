from __future__ import annotations

from pharmacy_navi.ai.prompts import LIST_HEADING

from .base import ChatMessage, ChatProvider


class StubProvider(ChatProvider):
    """
    Deterministic provider for tests/dev when an external LLM is not configured.
    Replies with the intro sentence and the shortlist it was given.
    """

    name = "stub"

    async def chat(self, messages: list[ChatMessage]) -> str:
        user = next((m.content for m in reversed(messages) if m.role == "user"), "")
        head, marker, tail = user.partition(LIST_HEADING)
        if not marker:
            return ""
        intro = head.strip().rsplit("\n\n", 1)[-1].strip()
        parts = [p for p in (intro, tail.strip()) if p]
        return "\n\n".join(parts)
