from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# --------------------
# Chat
# --------------------


class ChatMessageIn(BaseModel):
    role: Optional[str] = "user"
    content: Optional[str] = ""

    @field_validator("role", "content", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


class ChatRequest(BaseModel):
    messages: List[ChatMessageIn] = Field(default_factory=list)

    @property
    def last_user_message(self) -> str:
        if not self.messages:
            return ""
        return self.messages[-1].content or ""


class ChatReply(BaseModel):
    reply: str


# --------------------
# LINE webhook
# --------------------


class WebhookAck(BaseModel):
    ok: bool = True
    method: Optional[str] = None
