from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ChatMessage:
    role: str  # system | user | assistant
    content: str


class ProviderError(RuntimeError):
    def __init__(self, status_code: int | None, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:  # pragma: no cover
        prefix = f"Chat provider error ({self.status_code})" if self.status_code is not None else "Chat provider error"
        return f"{prefix}: {self.message}"


class ChatProvider(Protocol):
    name: str

    async def chat(self, messages: list[ChatMessage]) -> str: ...
