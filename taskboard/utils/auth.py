# taskboard/utils/auth.py
import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session, joinedload

from taskboard.config.security import SecurityConfig
from taskboard.database import get_db
from taskboard.models import AuthSession, User
from taskboard.utils.security import generate_session_token

logger = logging.getLogger(__name__)


def create_session(db: Session, user_id: int, now: Optional[datetime] = None) -> str:
    """Persist a new session for the user and return its token"""
    issued_at = now or datetime.utcnow()
    token = generate_session_token()
    db.add(AuthSession(
        token=token,
        user_id=user_id,
        expires_at=issued_at + SecurityConfig.session_ttl(),
        created_at=issued_at,
    ))
    db.commit()
    return token


def resolve_session(db: Session, token: Optional[str], now: Optional[datetime] = None) -> Optional[User]:
    """Return the session's user, or None when the token is unknown or expired.

    An expired session is deleted on the spot; there is no other point where
    expiry is decided.
    """
    if not token:
        return None

    session = db.query(AuthSession).options(
        joinedload(AuthSession.user)
    ).filter(AuthSession.token == token).first()

    if session is None:
        return None

    if session.is_expired(now):
        logger.info(f"Session for user {session.user_id} expired, removing it")
        db.delete(session)
        db.commit()
        return None

    return session.user


def delete_session(db: Session, token: Optional[str]) -> None:
    """Remove a session; unknown tokens are ignored"""
    if not token:
        return
    db.query(AuthSession).filter(AuthSession.token == token).delete(synchronize_session=False)
    db.commit()


def purge_expired_sessions(db: Session, now: Optional[datetime] = None) -> int:
    """Bulk delete every expired session, returns the number removed"""
    cutoff = now or datetime.utcnow()
    count = db.query(AuthSession).filter(
        AuthSession.expires_at <= cutoff
    ).delete(synchronize_session=False)
    db.commit()
    return count


def set_session_cookie(response: Response, token: str) -> None:
    config = SecurityConfig.SESSION
    response.set_cookie(
        key=config['cookie_name'],
        value=token,
        max_age=SecurityConfig.cookie_max_age(),
        path=config['path'],
        httponly=config['httponly'],
        samesite=config['samesite'],
        secure=config['secure'],
    )


def clear_session_cookie(response: Response) -> None:
    config = SecurityConfig.SESSION
    response.delete_cookie(
        key=config['cookie_name'],
        path=config['path'],
        httponly=config['httponly'],
        samesite=config['samesite'],
        secure=config['secure'],
    )


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(SecurityConfig.SESSION['cookie_name'])


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )

    user = resolve_session(db, get_session_token(request))
    if user is None:
        raise credentials_exception

    # Check if user is active
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account has been deactivated. Please contact administrator.",
        )

    return user
