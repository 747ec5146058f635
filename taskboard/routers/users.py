# taskboard/routers/users.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models import Task, User
from taskboard.schemas import UserCreate, UserUpdate, UserEnvelope, UserList, SuccessOut
from taskboard.utils.auth import get_current_user
from taskboard.utils.permissions import Action, authorize
from taskboard.utils.security import hash_password

router = APIRouter()
logger = logging.getLogger(__name__)

# Fields that are only written when a non-empty value is sent
SKIP_IF_EMPTY = ("name", "role", "password")
# Columns that cannot be cleared; an explicit null for them is ignored
NON_NULLABLE_FIELDS = ("is_active",)


@router.get("", response_model=UserList)
def get_all_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get all users, newest first"""
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return {"users": users}


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a new user - EMPLOYEE accounts may not create users"""
    authorize(Action.USER_CREATE, current_user)

    if not user.username or not user.password or not user.name:
        raise HTTPException(status_code=400, detail="Username, password and name are required")

    # Check if username already exists
    existing_user = db.query(User).filter(User.username == user.username).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Username already exists")

    db_user = User(
        username=user.username,
        name=user.name,
        hashed_password=hash_password(user.password),
        role=user.role,
        department=user.department,
    )

    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Username already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating user")
        raise HTTPException(status_code=500, detail="Error creating user")

    db.refresh(db_user)
    logger.info(f"User {db_user.id} created by user {current_user.id}")
    return {"user": db_user}


@router.put("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a user.

    Anyone may change their own password; every other change needs a
    management role, and toggling ``isActive`` needs ADMIN.
    """
    update_data = user_update.model_dump(exclude_unset=True)
    for field in SKIP_IF_EMPTY:
        if field in update_data and not update_data[field]:
            update_data.pop(field)
    for field in NON_NULLABLE_FIELDS:
        if field in update_data and update_data[field] is None:
            update_data.pop(field)

    own_password_change = user_id == current_user.id and set(update_data) <= {"password"}
    if not own_password_change:
        authorize(Action.USER_UPDATE, current_user)
    if "is_active" in update_data:
        authorize(Action.USER_TOGGLE_ACTIVE, current_user)

    db_user = db.query(User).filter(User.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")

    # Handle password update separately (hash it if provided)
    if 'password' in update_data:
        db_user.hashed_password = hash_password(update_data.pop('password'))

    # Update other fields
    for field, value in update_data.items():
        setattr(db_user, field, value)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating user {user_id}")
        raise HTTPException(status_code=500, detail="Error updating user")

    db.refresh(db_user)
    return {"user": db_user}


@router.delete("/{user_id}", response_model=SuccessOut)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a user - Only ADMIN can delete users, never their own account"""
    authorize(Action.USER_DELETE, current_user)

    # Prevent users from deleting themselves
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account"
        )

    db_user = db.query(User).filter(User.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")

    # Tasks keep their creator; such accounts can only be deactivated
    created = db.query(Task).filter(Task.creator_id == user_id).count()
    if created:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User has created tasks; deactivate the account instead"
        )

    db.delete(db_user)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error deleting user {user_id}")
        raise HTTPException(status_code=500, detail="Error deleting user")

    logger.info(f"User {user_id} deleted by user {current_user.id}")
    return {"success": True}
