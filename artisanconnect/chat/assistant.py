from __future__ import annotations

import json
import logging
import re

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import chat_completion
from ..ranking.models import VendorRecord
from .models import AssistantReply, ConversationState, ConversationTurn

logger = logging.getLogger(__name__)

_MAX_TURNS = 6  # 3 exchanges
_DESCRIPTION_LIMIT = 200

FALLBACK_REPLY = "Sorry, I could not complete that. Please try again."

_BLACKLIST_RE = re.compile(r"BLACKLIST_IDS:\s*([^\n]+)", re.IGNORECASE)
_BLACKLIST_LINE_RE = re.compile(r"\n*BLACKLIST_IDS:\s*[^\n]+\s*", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = """\
You are the ArtisanConnect AI assistant. You help users find suitable service \
providers (vendors) from our platform.

Current vendors (never recommend blacklisted; they are already excluded from this list):
{vendors}

Rules:
1. Suggest vendors that match the user's need (category, location, service description).
2. If you notice signs of rating manipulation (e.g. perfect 5.0 with no variance, \
or unrealistic patterns), say so and add that vendor's id to BLACKLIST_IDS so we can review.
3. At the end of your reply, if you recommend blacklisting any vendor for manipulation, \
add exactly one line: BLACKLIST_IDS: id1,id2 (comma-separated, no spaces after commas). \
If no blacklist, do not add this line.
4. Keep replies concise and helpful."""


def build_system_prompt(vendors: list[VendorRecord]) -> str:
    if vendors:
        listing = json.dumps([
            {
                "id": v.id,
                "businessName": v.business_name or "",
                "category": v.category or "",
                "description": (v.description or "")[:_DESCRIPTION_LIMIT],
                "address": v.address or "",
                "ratingAverage": v.rating_average,
            }
            for v in vendors
        ])
    else:
        listing = "No vendors available yet."
    return SYSTEM_PROMPT.format(vendors=listing)


# ---------------------------------------------------------------------------
# Moderation convention
# ---------------------------------------------------------------------------


def parse_blacklist_ids(content: str | None) -> list[str]:
    """Vendor ids from a ``BLACKLIST_IDS: a,b`` line, ``[]`` when there is none."""
    if not content:
        return []
    match = _BLACKLIST_RE.search(content)
    if not match:
        return []
    return [part.strip() for part in match.group(1).split(",") if part.strip()]


def strip_blacklist_line(content: str | None) -> str:
    """Remove the ``BLACKLIST_IDS`` line so the reply can be shown to the user."""
    if not content:
        return content or ""
    return _BLACKLIST_LINE_RE.sub("", content).strip()


# ---------------------------------------------------------------------------
# Conversation
# ---------------------------------------------------------------------------


def update_conversation_state(
    state: ConversationState,
    user_message: str,
    assistant_message: str,
) -> ConversationState:
    turns = list(state.turns)
    turns.append(ConversationTurn(role="user", content=user_message))
    turns.append(ConversationTurn(role="assistant", content=assistant_message))

    # Keep only last _MAX_TURNS messages
    if len(turns) > _MAX_TURNS:
        turns = turns[-_MAX_TURNS:]

    return ConversationState(turns=turns)


def ask_assistant(
    vendors: list[VendorRecord],
    state: ConversationState,
    message: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> AssistantReply:
    """
    Ask the LLM about ``message`` given the active vendors and prior turns.

    Returns the display text with the ``BLACKLIST_IDS`` line removed and the
    ids it named. Any failure yields the fallback reply and no suggestions.
    """
    messages = [{"role": "system", "content": build_system_prompt(vendors)}]
    messages.extend({"role": t.role, "content": t.content} for t in state.turns)
    messages.append({"role": "user", "content": message})

    try:
        raw = chat_completion(messages, config=config)
    except Exception:
        logger.warning("Assistant call failed, returning fallback reply", exc_info=True)
        return AssistantReply(message=FALLBACK_REPLY, ok=False)

    display = strip_blacklist_line(raw)
    if not display:
        logger.warning("Assistant returned an empty reply")
        return AssistantReply(message=FALLBACK_REPLY, ok=False)
    return AssistantReply(message=display, blacklist_suggestions=parse_blacklist_ids(raw))
