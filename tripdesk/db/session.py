"""Database session management."""
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from tripdesk.config.settings import settings


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool options for the configured backend; SQLite takes none."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False, **settings.DB_CONNECT_ARGS}}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_OVERFLOW,
        "connect_args": settings.DB_CONNECT_ARGS,
    }


engine = create_engine(
    settings.get_database_url(),
    echo=settings.DB_ECHO,
    **_engine_options(settings.get_database_url()),
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
