from __future__ import annotations

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000)


class ConversationTurn(BaseModel):
    role: str
    content: str


class ConversationState(BaseModel):
    turns: list[ConversationTurn] = Field(default_factory=list)


class AssistantReply(BaseModel):
    message: str
    blacklist_suggestions: list[str] = Field(default_factory=list)
    ok: bool = True


class ChatResponse(BaseModel):
    message: str
    flagged_vendor_ids: list[str] = Field(default_factory=list)
    error: bool = False
