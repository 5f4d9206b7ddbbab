import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from app.core.hashing import Hasher
from app.core.security import create_access_token
from app.db.models.user import User
from app.db.session import is_storable_id

logger = logging.getLogger(__name__)

# Shared by the unknown-email and wrong-password paths so callers cannot tell them apart.
INVALID_CREDENTIALS = "Invalid email or password"
EMAIL_IN_USE = "Email already in use"


def _auth_payload(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "token": create_access_token(user.id, user.email),
    }


def register(db: Session, email: str, password: str, name: str) -> dict:
    if db.query(User).filter(User.email == email).first():
        raise BadRequestError(EMAIL_IN_USE)

    new_user = User(
        email=email,
        name=name,
        hashed_password=Hasher.hash_password(password),
    )

    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise BadRequestError(EMAIL_IN_USE)
    db.refresh(new_user)

    logger.info("User registered", extra={"user_id": new_user.id})
    return _auth_payload(new_user)


def login(db: Session, email: str, password: str) -> dict:
    db_user = db.query(User).filter(User.email == email).first()
    if not db_user or not Hasher.verify_password(password, db_user.hashed_password):
        logger.warning("Failed login attempt")
        raise UnauthorizedError(INVALID_CREDENTIALS)

    logger.info("User logged in", extra={"user_id": db_user.id})
    return _auth_payload(db_user)


def get_user_by_id(db: Session, user_id: int) -> dict:
    user = db.get(User, user_id) if is_storable_id(user_id) else None
    if user is None:
        raise NotFoundError("User not found")

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "created_at": user.created_at,
    }
