"""
Scripted onboarding chat.

The wizard asks one question per step and collects answers into a dict
shaped like the profile form. It never saves anything itself: the
collected answers are handed back as a pre-filled form for the vendor to
review and submit.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from .models import VENDOR_CATEGORIES

SKIP = "skip"


@dataclass(frozen=True)
class OnboardingStep:
    id: str
    prompt: str
    input_type: str = "text"
    placeholder: str | None = None
    options: list[str] = field(default_factory=list)


STEPS: list[OnboardingStep] = [
    OnboardingStep(
        id="businessName",
        prompt="Hi! I'll help you set up your vendor profile. What's your business name?",
        placeholder="e.g. Adeola Kitchens",
    ),
    OnboardingStep(
        id="category",
        prompt="Which category best fits your business?",
        input_type="choice",
        options=VENDOR_CATEGORIES,
    ),
    OnboardingStep(
        id="description",
        prompt="In a few sentences, describe what you offer and who you typically work with.",
        placeholder="e.g. We provide office catering for 20-80 people...",
    ),
    OnboardingStep(
        id="phone",
        prompt="What's the best phone number for customers to reach you?",
        placeholder="+234 800 000 0000",
    ),
    OnboardingStep(
        id="whatsapp",
        prompt='Do you have a WhatsApp business link? You can paste it here or type "skip".',
        placeholder="https://wa.me/... or skip",
    ),
    OnboardingStep(
        id="address",
        prompt="Where are you based? (City and area is fine.)",
        placeholder="e.g. Lagos, Nigeria",
    ),
    OnboardingStep(
        id="location",
        prompt=(
            "Want to show your location on the map? Send latitude,longitude "
            '(e.g. 6.5244,3.3792) or type "skip".'
        ),
        placeholder="6.5244, 3.3792 or skip",
    ),
    OnboardingStep(
        id="done",
        prompt=(
            "You're all set! Review the pre-filled profile and save it. "
            "You can edit anything there."
        ),
        input_type="none",
    ),
]

_SEPARATOR_RE = re.compile(r"[\s,]+")


class OnboardingState(BaseModel):
    step_index: int = 0
    answers: dict[str, str] = Field(default_factory=dict)
    error: str | None = None

    @property
    def step(self) -> OnboardingStep:
        return STEPS[min(self.step_index, len(STEPS) - 1)]

    @property
    def done(self) -> bool:
        return self.step.id == "done"


def parse_location_input(value: str | None) -> tuple[str, str]:
    """Split ``"lat,lng"`` or ``"lat lng"`` into two numeric strings; ``("", "")`` otherwise."""
    text = (value or "").strip().lower()
    if not text or text == SKIP:
        return "", ""
    parts = [p for p in _SEPARATOR_RE.split(text) if p]
    if len(parts) < 2:
        return "", ""
    try:
        lat = float(parts[0])
        lng = float(parts[1])
    except ValueError:
        return "", ""
    return str(lat), str(lng)


def start_onboarding() -> OnboardingState:
    return OnboardingState()


def _match_option(reply: str, options: list[str]) -> str | None:
    lowered = reply.lower()
    for option in options:
        if option.lower() == lowered:
            return option
    return None


def answer_step(state: OnboardingState, reply: str | None) -> OnboardingState:
    """Apply one reply and return the next state; the input state is not modified."""
    if state.done:
        return state

    step = state.step
    text = (reply or "").strip()
    answers = dict(state.answers)

    if step.id == "whatsapp":
        answers["whatsapp"] = "" if text.lower() == SKIP else text
    elif step.id == "location":
        answers["latitude"], answers["longitude"] = parse_location_input(text)
    elif step.input_type == "choice":
        option = _match_option(text, step.options)
        if option is None:
            return state.model_copy(
                update={"error": "Please pick one of: " + ", ".join(step.options)}
            )
        answers[step.id] = option
    else:
        if not text:
            return state.model_copy(update={"error": "Please enter an answer to continue."})
        answers[step.id] = text

    return OnboardingState(step_index=state.step_index + 1, answers=answers)


def current_prompt(state: OnboardingState) -> dict:
    step = state.step
    return {
        "step": step.id,
        "message": step.prompt,
        "input_type": step.input_type,
        "placeholder": step.placeholder,
        "options": list(step.options),
        "progress": f"Step {min(state.step_index, len(STEPS) - 1) + 1} of {len(STEPS)}",
        "error": state.error,
        "done": state.done,
    }


def prefilled_profile(state: OnboardingState) -> dict[str, str]:
    """The collected answers in profile-form shape, blanks for anything unanswered."""
    answers = state.answers
    return {
        "businessName": answers.get("businessName", ""),
        "category": answers.get("category", ""),
        "description": answers.get("description", ""),
        "phone": answers.get("phone", ""),
        "whatsapp": answers.get("whatsapp", ""),
        "address": answers.get("address", ""),
        "latitude": answers.get("latitude", ""),
        "longitude": answers.get("longitude", ""),
    }
