"""
Session authentication.

Sessions live server-side in the sessions table. The "sid" cookie carries
the session id signed with SESSION_SECRET; a tampered or expired cookie is
treated the same as no cookie.
"""

import logging
import secrets
from typing import Annotated

import bcrypt
from fastapi import Depends, HTTPException, Request, Response, status
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from .config import config, get_db
from .database import Database, DBSession, DBUser

logger = logging.getLogger(__name__)

SESSION_COOKIE = "sid"

# Fixed id of the provisioned admin user record
ADMIN_USER_ID = "admin-user"

# bcrypt ignores input past 72 bytes; newer releases reject it outright
_BCRYPT_MAX_BYTES = 72


def get_serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(config.SESSION_SECRET, salt="newsai-session")


# ─── Passwords ──────────────────────────────────────────────────

def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured cost factor."""
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:_BCRYPT_MAX_BYTES], password_hash.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Password check against malformed hash")
        return False


def check_admin_credentials(username: str, password: str) -> bool:
    """Constant-time comparison against the configured admin credentials."""
    username_ok = secrets.compare_digest(username.encode(), config.ADMIN_USERNAME.encode())
    password_ok = secrets.compare_digest(password.encode(), config.ADMIN_PASSWORD.encode())
    return username_ok and password_ok


# ─── Session cookie ─────────────────────────────────────────────

def start_session(response: Response, db: Database, user_id: str) -> DBSession:
    """Create a session record and set the signed cookie on the response."""
    sid = secrets.token_urlsafe(32)
    session = db.create_session(sid, user_id, config.SESSION_MAX_AGE)

    response.set_cookie(
        key=SESSION_COOKIE,
        value=get_serializer().dumps(sid),
        max_age=config.SESSION_MAX_AGE,
        httponly=True,
        secure=config.SESSION_SECURE,
        samesite="lax",
        path="/",
    )
    return session


def clear_session_cookie(response: Response) -> None:
    """Clear the session cookie."""
    response.delete_cookie(
        key=SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=config.SESSION_SECURE,
        samesite="lax",
    )


def read_session_id(request: Request) -> str | None:
    """Return the verified sid from the request cookie, if any."""
    cookie = request.cookies.get(SESSION_COOKIE)
    if not cookie:
        return None

    try:
        sid = get_serializer().loads(cookie, max_age=config.SESSION_MAX_AGE)
    except SignatureExpired:
        logger.debug("Session cookie expired")
        return None
    except BadSignature:
        logger.warning("Invalid session cookie signature")
        return None

    return sid if isinstance(sid, str) else None


# ─── Dependencies ───────────────────────────────────────────────

def get_current_session(
    request: Request,
    db: Annotated[Database, Depends(get_db)],
) -> DBSession | None:
    """Look up the live session for this request, or None."""
    sid = read_session_id(request)
    if not sid:
        return None
    return db.get_session(sid)


def require_session(
    session: Annotated[DBSession | None, Depends(get_current_session)],
) -> DBSession:
    """
    Require a valid session.

    Raises 401 if not authenticated.
    """
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session


def require_admin(
    session: Annotated[DBSession, Depends(require_session)],
    db: Annotated[Database, Depends(get_db)],
) -> DBUser:
    """
    Require a session whose user is an admin.

    Raises 401 without a session, 403 for non-admin users.
    """
    user = db.get_user(session.user_id)
    if user is None or not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


SessionDep = Annotated[DBSession, Depends(require_session)]
AdminDep = Annotated[DBUser, Depends(require_admin)]
