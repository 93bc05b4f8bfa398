"""FastAPI dependencies."""
from typing import Generator

from sqlalchemy.orm import Session

from bloodbank.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """One session per HTTP request, so reads see committed state only."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
