# taskboard/services/bootstrap.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from taskboard.config.security import SecurityConfig
from taskboard.database import Base, engine
from taskboard.models import User, UserRole
from taskboard.utils.security import hash_password

logger = logging.getLogger(__name__)


def create_tables(bind=None) -> None:
    """Create every table that does not exist yet"""
    # Importing the models package registers every table on Base.metadata
    import taskboard.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def ensure_admin(db: Session) -> Optional[User]:
    """Create the default admin account when the users table is empty.

    Returns the new user, or None when users already exist.
    """
    if db.query(User).count() > 0:
        return None

    config = SecurityConfig.BOOTSTRAP_ADMIN
    admin = User(
        username=config['username'],
        name=config['name'],
        hashed_password=hash_password(config['password']),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Default admin user '{admin.username}' created")
    return admin
