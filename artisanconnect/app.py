from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .auth.config import DEFAULT_AUTH_CONFIG
from .auth.dependencies import require_admin, require_user, require_vendor
from .auth.models import LoginRequest, SignupRequest
from .auth.users import UsernameTaken, authenticate, register
from .chat.assistant import ask_assistant, update_conversation_state
from .chat.models import ChatRequest, ChatResponse, ConversationState
from .moderation.activities import get_recent_activities, record_activity
from .moderation.blacklist import (
    blacklist_vendor,
    pending_suggestions,
    reject_suggestion,
    suggest_blacklist,
)
from .moderation.models import BlacklistSuggestion, ModerationResult
from .moderation.stats import compute_stats
from .ranking.models import SearchRequest, SearchResponse, VendorRecord
from .ranking.search import search_vendors, top_rated_vendors
from .store.vendors import VendorNotFound, get_vendor, list_active_vendors
from .vendors.models import (
    VENDOR_CATEGORIES,
    OnboardingReply,
    OnboardingResponse,
    ReviewOut,
    ReviewRequest,
    VendorProfileForm,
)
from .vendors.onboarding import (
    OnboardingState,
    answer_step,
    current_prompt,
    prefilled_profile,
    start_onboarding,
)
from .vendors.profile import (
    ProfileValidationError,
    VendorOwnershipError,
    get_vendor_profile,
    save_vendor_profile,
)
from .vendors.reviews import list_reviews, submit_review

app = FastAPI(title="ArtisanConnect Vendor Directory API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_AUTH_CONFIG.session_secret)


def _not_found(exc: VendorNotFound) -> HTTPException:
    return HTTPException(status_code=404, detail=str(exc))


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {"categories": VENDOR_CATEGORIES}


@app.get("/vendors/top", response_model=list[VendorRecord])
def top_vendors(limit: int = Query(default=6, ge=1, le=50)) -> list[VendorRecord]:
    return top_rated_vendors(limit)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/signup")
def signup(body: SignupRequest, request: Request) -> dict:
    try:
        user = register(body.username, body.password, body.role)
    except UsernameTaken as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session.clear()
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Browsing & reviews ───────────────────────────────────────────────────


@app.get("/vendors", response_model=SearchResponse)
def vendors(
    category: str | None = Query(default=None),
    keyword: str | None = Query(default=None, max_length=200),
    limit: int = Query(default=50, ge=1, le=100),
    user: dict = Depends(require_user),
) -> SearchResponse:
    return search_vendors(SearchRequest(category=category, keyword=keyword, limit=limit))


@app.get("/vendors/{vendor_id}", response_model=VendorRecord)
def vendor_detail(vendor_id: str, user: dict = Depends(require_user)) -> VendorRecord:
    vendor = get_vendor(vendor_id)
    if vendor is None:
        raise _not_found(VendorNotFound(vendor_id))
    return vendor


@app.get("/vendors/{vendor_id}/reviews", response_model=list[ReviewOut])
def vendor_reviews(vendor_id: str, user: dict = Depends(require_user)) -> list[dict]:
    if get_vendor(vendor_id) is None:
        raise _not_found(VendorNotFound(vendor_id))
    return list_reviews(vendor_id)


@app.post("/vendors/{vendor_id}/reviews", response_model=ReviewOut)
def post_review(
    vendor_id: str,
    body: ReviewRequest,
    user: dict = Depends(require_user),
) -> dict:
    try:
        return submit_review(vendor_id, body, user["username"])
    except VendorNotFound as exc:
        raise _not_found(exc) from exc


# ── Vendor self-service ──────────────────────────────────────────────────


@app.get("/vendor/profile")
def my_profile(user: dict = Depends(require_vendor)) -> dict:
    try:
        profile = get_vendor_profile(user["username"], user["username"])
    except VendorOwnershipError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    if profile is None:
        raise HTTPException(status_code=404, detail="No profile yet")
    return profile


@app.put("/vendor/profile")
def update_profile(body: VendorProfileForm, user: dict = Depends(require_vendor)) -> dict:
    try:
        return save_vendor_profile(user["username"], body, user["username"])
    except ProfileValidationError as exc:
        raise HTTPException(status_code=422, detail={"errors": exc.errors}) from exc
    except VendorOwnershipError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc


def _onboarding_response(state: OnboardingState) -> OnboardingResponse:
    prompt = current_prompt(state)
    prefilled = prefilled_profile(state) if state.done else None
    return OnboardingResponse(**prompt, prefilled=prefilled)


@app.post("/vendor/onboarding/reset", response_model=OnboardingResponse)
def reset_onboarding(request: Request, user: dict = Depends(require_vendor)) -> OnboardingResponse:
    state = start_onboarding()
    request.session["onboarding_state"] = state.model_dump()
    return _onboarding_response(state)


@app.post("/vendor/onboarding", response_model=OnboardingResponse)
def onboarding(
    body: OnboardingReply,
    request: Request,
    user: dict = Depends(require_vendor),
) -> OnboardingResponse:
    raw_state = request.session.get("onboarding_state")
    if raw_state is None:
        # First call only opens the conversation
        state = start_onboarding()
    else:
        state = answer_step(OnboardingState(**raw_state), body.message)
    request.session["onboarding_state"] = state.model_dump()
    return _onboarding_response(state)


# ── Chat endpoint ────────────────────────────────────────────────────────


@app.post("/chat", response_model=ChatResponse)
def chat(
    body: ChatRequest,
    request: Request,
    user: dict = Depends(require_user),
) -> ChatResponse:
    raw_state = request.session.get("chat_state")
    conv_state = ConversationState(**raw_state) if raw_state else ConversationState()

    reply = ask_assistant(list_active_vendors(), conv_state, body.message)

    flagged: list[str] = []
    if reply.blacklist_suggestions:
        flagged = suggest_blacklist(reply.blacklist_suggestions)

    if reply.ok:
        conv_state = update_conversation_state(conv_state, body.message, reply.message)
        request.session["chat_state"] = conv_state.model_dump()

    record_activity(
        "chat",
        f"{user['username']} asked the assistant",
        flagged_vendor_ids=flagged,
        ok=reply.ok,
    )

    return ChatResponse(message=reply.message, flagged_vendor_ids=flagged, error=not reply.ok)


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/admin/suggestions", response_model=list[BlacklistSuggestion])
def admin_suggestions(user: dict = Depends(require_admin)) -> list[BlacklistSuggestion]:
    return pending_suggestions()


@app.post("/admin/vendors/{vendor_id}/blacklist", response_model=ModerationResult)
def admin_blacklist(vendor_id: str, user: dict = Depends(require_admin)) -> ModerationResult:
    try:
        blacklist_vendor(vendor_id, user["username"])
    except VendorNotFound as exc:
        raise _not_found(exc) from exc
    return ModerationResult(vendor_id=vendor_id, status="blacklisted")


@app.post("/admin/suggestions/{vendor_id}/reject", response_model=ModerationResult)
def admin_reject(vendor_id: str, user: dict = Depends(require_admin)) -> ModerationResult:
    try:
        reject_suggestion(vendor_id, user["username"])
    except VendorNotFound as exc:
        raise _not_found(exc) from exc
    return ModerationResult(vendor_id=vendor_id, status="rejected")


@app.get("/admin/activities")
def admin_activities(
    limit: int = Query(default=50, ge=1, le=200),
    user: dict = Depends(require_admin),
) -> list[dict]:
    return get_recent_activities(limit)


@app.get("/admin/stats")
def admin_stats(user: dict = Depends(require_admin)) -> dict:
    return compute_stats()
