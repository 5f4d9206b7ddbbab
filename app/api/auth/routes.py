from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.models.user import User
from app.api.schemas import Envelope, success
from app.api.auth.schemas import AuthOut, UserCreate, UserLogin, UserOut
from app.api.auth import services
from app.core.security import get_current_user

router = APIRouter()


@router.post("/register", response_model=Envelope[AuthOut], status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    return success(services.register(db, user.email, user.password, user.name))


@router.post("/login", response_model=Envelope[AuthOut])
def login(user: UserLogin, db: Session = Depends(get_db)):
    return success(services.login(db, user.email, user.password))


@router.get("/me", response_model=Envelope[UserOut])
def me(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return success(services.get_user_by_id(db, current_user.id))
