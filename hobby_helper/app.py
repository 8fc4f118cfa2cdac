from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from bson import ObjectId
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pymongo.database import Database

from .auth.dependencies import get_current_user, require_user
from .auth.tokens import create_access_token
from .auth.users import authenticate
from .config import get_settings
from .database.client import close_client, ensure_indexes, get_db, utcnow
from .errors import register_error_handlers
from .hobbies.models import HobbyCreate, HobbyOut
from .hobbies.repository import create_hobby, find_hobbies_by_name, get_hobby, list_hobbies
from .notifications.models import Reminder
from .notifications.reminders import NUDGE_DELAY_SECONDS, build_nudge, build_rating_reminder
from .recommendations.models import SuggestionFilters, suggestion_filters
from .recommendations.retrieval import generate_recommendations
from .user_hobbies.models import UserHobbyCreate, UserHobbyOut
from .user_hobbies.repository import create_user_hobby, get_hobby_history, list_user_hobbies
from .users.models import (
    LoginRequest,
    PerformedHobby,
    RegisterRequest,
    StartHobbyRequest,
    StartHobbyResponse,
    TokenResponse,
    UserOut,
    UserProfile,
    UserUpdate,
)
from .users.repository import (
    EmailTakenError,
    add_performed_hobby,
    create_user,
    public_user,
    update_user,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_indexes(get_db())
    logger.info("Hobby Helper API ready")
    yield
    close_client()


app = FastAPI(title="Hobby Helper API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/notifications/nudge", response_model=Reminder)
def nudge(
    delay_seconds: int = Query(default=NUDGE_DELAY_SECONDS, ge=0, alias="delaySeconds"),
) -> Reminder:
    return build_nudge(delay_seconds)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/api/register", response_model=TokenResponse, status_code=201)
def register(body: RegisterRequest, db: Database = Depends(get_db)) -> TokenResponse:
    try:
        user = create_user(db, body)
    except EmailTakenError:
        raise HTTPException(status_code=400, detail="User already exists.")
    return TokenResponse(token=create_access_token(user["_id"]))


@app.post("/api/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Database = Depends(get_db)) -> TokenResponse:
    user = authenticate(db, body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return TokenResponse(token=create_access_token(user["_id"]))


# ── Profile endpoints ────────────────────────────────────────────────────


@app.get("/api/users", response_model=UserProfile)
@app.get("/api/users/profile", response_model=UserProfile)
def get_profile(
    user: dict = Depends(require_user),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    profile = public_user(user)
    profile["hobbyHistory"] = get_hobby_history(db, user["_id"])
    return profile


@app.patch("/api/users", response_model=UserOut)
@app.patch("/api/users/profile", response_model=UserOut)
def patch_profile(
    body: UserUpdate,
    user: dict = Depends(require_user),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    try:
        updated = update_user(db, user["_id"], body)
    except EmailTakenError:
        raise HTTPException(status_code=400, detail="Email already in use.")
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return public_user(updated)


@app.post("/api/users/history", response_model=StartHobbyResponse, status_code=201)
def start_hobby(
    body: StartHobbyRequest,
    user: dict = Depends(require_user),
    db: Database = Depends(get_db),
) -> StartHobbyResponse:
    hobby = get_hobby(db, body.hobby_id)
    if not hobby:
        raise HTTPException(status_code=404, detail="Hobby not found")

    entry = add_performed_hobby(
        db,
        user["_id"],
        ObjectId(hobby["_id"]),
        body.performed_at or utcnow(),
        body.notes,
    )
    return StartHobbyResponse(
        entry=PerformedHobby(hobby=hobby["_id"], performed_at=entry["performedAt"], notes=entry.get("notes")),
        reminder=build_rating_reminder(hobby["_id"], body.delay_seconds),
    )


# ── Hobby endpoints ──────────────────────────────────────────────────────


@app.get("/api/hobbies", response_model=list[HobbyOut])
def hobbies(name: str | None = None, db: Database = Depends(get_db)) -> list[dict[str, Any]]:
    if name:
        found = find_hobbies_by_name(db, name)
        if not found:
            logger.warning("No hobby found for name %r", name)
            raise HTTPException(status_code=404, detail="Hobby not found")
        return found
    return list_hobbies(db)


# Must stay above /api/hobbies/{hobby_id}
@app.get("/api/hobbies/suggestions", response_model=list[HobbyOut])
def suggestions(
    filters: SuggestionFilters = Depends(suggestion_filters),
    user: dict | None = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> list[dict[str, Any]]:
    return generate_recommendations(db, user, filters)


@app.get("/api/hobbies/{hobby_id}", response_model=HobbyOut)
def hobby_detail(hobby_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    hobby = get_hobby(db, hobby_id)
    if not hobby:
        raise HTTPException(status_code=404, detail="Hobby not found")
    return hobby


@app.post("/api/hobbies", response_model=HobbyOut, status_code=201)
def add_hobby(
    body: HobbyCreate,
    user: dict = Depends(require_user),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return create_hobby(db, body)


# ── Hobby history endpoints ──────────────────────────────────────────────


@app.post("/api/user-hobbies", response_model=UserHobbyOut, status_code=201)
@app.post("/api/userHobbies", response_model=UserHobbyOut, status_code=201)
def record_user_hobby(
    body: UserHobbyCreate,
    user: dict = Depends(require_user),
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    if body.user != str(user["_id"]):
        raise HTTPException(status_code=403, detail="Cannot record hobbies for another user")
    if not get_hobby(db, body.hobby):
        raise HTTPException(status_code=404, detail="Hobby not found")
    return create_user_hobby(db, body)


@app.get("/api/user-hobbies/{user_id}", response_model=list[UserHobbyOut])
@app.get("/api/userHobbies/{user_id}", response_model=list[UserHobbyOut])
def user_hobby_history(
    user_id: str,
    user: dict = Depends(require_user),
    db: Database = Depends(get_db),
) -> list[dict[str, Any]]:
    if user_id != str(user["_id"]):
        raise HTTPException(status_code=403, detail="Cannot read another user's hobbies")
    return list_user_hobbies(db, user["_id"])
