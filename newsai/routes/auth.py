"""
User account routes: login, registration, current user, logout.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from ..auth import (
    SessionDep,
    clear_session_cookie,
    hash_password,
    start_session,
    verify_password,
)
from ..config import get_db
from ..database import Database
from ..exceptions import DuplicateUsernameError, require_user
from ..schemas import CredentialsRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6


@router.post("/login")
async def login(
    payload: CredentialsRequest,
    response: Response,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    """Verify credentials and start a session."""
    user = db.get_user_by_username(payload.username)
    if user is None or not verify_password(payload.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    start_session(response, db, user.id)
    logger.info(f"User '{user.username}' logged in")
    return {"user": UserResponse.from_db(user)}


@router.post("/register", status_code=201)
async def register(
    payload: CredentialsRequest,
    response: Response,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    """Create an account and start a session."""
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    if db.get_user_by_username(payload.username):
        raise HTTPException(status_code=409, detail="Username already exists")

    try:
        user = db.create_user(payload.username, hash_password(payload.password))
    except DuplicateUsernameError:
        # Lost a race with a concurrent registration
        raise HTTPException(status_code=409, detail="Username already exists")

    start_session(response, db, user.id)
    logger.info(f"Registered user '{user.username}'")
    return {"user": UserResponse.from_db(user)}


@router.get("/user")
async def get_current_user(
    session: SessionDep,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    """Profile of the logged-in user."""
    user = require_user(db.get_user(session.user_id))
    return {"user": UserResponse.from_db(user)}


@router.post("/logout")
async def logout(
    session: SessionDep,
    response: Response,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    """Destroy the session and clear the cookie."""
    db.delete_session(session.sid)
    clear_session_cookie(response)
    return {"message": "Logged out successfully"}
