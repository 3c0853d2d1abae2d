import itertools
import secrets
import time

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .config import settings

class Base(DeclarativeBase):
    pass

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# 4-byte timestamp + 5 random bytes + 3-byte counter, hex encoded (24 chars)
_process_tag = secrets.token_bytes(5)
_counter = itertools.count()


def new_object_id() -> str:
    """
    Return a new 24-character hex identifier.

    Ids from one process sort in creation order unless more than 2**24 of
    them are made within the same second.
    """
    ts = int(time.time()).to_bytes(4, "big")
    count = (next(_counter) % 0x1000000).to_bytes(3, "big")
    return (ts + _process_tag + count).hex()
