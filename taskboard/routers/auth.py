import logging

from fastapi import APIRouter, HTTPException, Depends, Request, Response, status
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models import User
from taskboard.schemas import LoginRequest, UserEnvelope, SuccessOut
from taskboard.utils.auth import (
    create_session,
    delete_session,
    get_current_user,
    get_session_token,
    set_session_cookie,
    clear_session_cookie,
)
from taskboard.utils.security import verify_password, needs_rehash, hash_password

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=UserEnvelope)
def login(credentials: LoginRequest, response: Response, db: Session = Depends(get_db)):
    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    db_user = db.query(User).filter(User.username == credentials.username).first()
    if not db_user or not db_user.is_active or not verify_password(credentials.password, db_user.hashed_password):
        logger.info(f"Failed login for '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    if needs_rehash(db_user.hashed_password):
        db_user.hashed_password = hash_password(credentials.password)

    token = create_session(db, db_user.id)
    set_session_cookie(response, token)
    logger.info(f"User {db_user.id} logged in")
    return {"user": db_user}


@router.post("/logout", response_model=SuccessOut)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    delete_session(db, get_session_token(request))
    clear_session_cookie(response)
    return {"success": True}


@router.get("/me", response_model=UserEnvelope)
def me(current_user: User = Depends(get_current_user)):
    return {"user": current_user}
