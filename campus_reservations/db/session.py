from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from campus_reservations.core.config import DATABASE_URL, SQLITE_BUSY_TIMEOUT

Base = declarative_base()


def make_engine(url: str = DATABASE_URL):
    """Build an engine; SQLite connections are shared across threads and wait on locks."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        )
    return create_engine(url, pool_pre_ping=True)


engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    # Registers every model on Base.metadata
    import campus_reservations.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
