from contextlib import contextmanager
from typing import Generator

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from trackntoms.config import settings
from trackntoms.exceptions import TransactionError


engine = create_engine(
    settings.database_url,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session):
    """
    One atomic unit: commit when the block finishes, roll back on any error.

    Storage failures surface as TransactionError with the driver message;
    domain errors (validation, stock, not found) are re-raised untouched.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Transaction rolled back")
        raise TransactionError(str(exc), original=exc) from exc
    except Exception:
        db.rollback()
        raise
