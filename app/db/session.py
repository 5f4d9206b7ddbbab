from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("postgresql"):
        return {"options": "-csearch_path=public"}
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL)
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()

# Primary keys are INTEGER columns; anything outside this range cannot name a row.
MAX_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
