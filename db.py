#This is db.py
from datetime import datetime, timezone
from sqlalchemy import create_engine, Column, DateTime, Integer, JSON, String
from sqlalchemy.orm import declarative_base, sessionmaker

from config import DATABASE_URL

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuditEntry(Base):
    __tablename__ = "audit_entries"
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(40), unique=True, nullable=False)  # TRX_<epoch ms>_<9 chars>
    timestamp = Column(DateTime, default=utcnow)
    type = Column(String(64), nullable=False)      # csv_upload, route_optimization, ...
    data = Column(JSON)
    user = Column(String(64), default="system")


def build_session_factory(database_url: str, **engine_kwargs):
    """Create an engine for `database_url` and return (engine, sessionmaker)."""
    if database_url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    db_engine = create_engine(database_url, **engine_kwargs)
    return db_engine, sessionmaker(bind=db_engine, expire_on_commit=False)


engine, SessionLocal = build_session_factory(DATABASE_URL)


def init_db(db_engine=None):
    Base.metadata.create_all(db_engine or engine)
