"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for parcel storage.
"""

from pathlib import Path
from sqlalchemy import create_engine, Column, Integer, String
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Parcel(Base):
    """Parcel tracking record."""

    __tablename__ = "parcel"
    __table_args__ = {"sqlite_autoincrement": True}

    number = Column(Integer, primary_key=True, autoincrement=True)
    client = Column(Integer)
    status = Column(String)  # registered, sent, delivered
    address = Column(String)
    created_at = Column(String)  # RFC 3339, set by the caller

    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"


def _engine_url(db_path: Path) -> str:
    return f"sqlite:///{db_path}"


def init_database(db_path: Path) -> None:
    """
    Initialize database and create the parcel table.

    Args:
        db_path: Path to SQLite database file
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(_engine_url(db_path))
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(_engine_url(Path(db_path)))
    Session = sessionmaker(bind=engine)
    return Session()
