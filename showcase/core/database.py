"""Database engine and session management."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker

from showcase.core.config import settings


def _enable_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def enforce_sqlite_foreign_keys(engine: Engine) -> Engine:
    """SQLite ignores ON DELETE rules unless each connection turns foreign keys on."""
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Sessions are used from FastAPI's threadpool.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = enforce_sqlite_foreign_keys(
    create_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        **_engine_options(settings.DATABASE_URL),
    )
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; closed when the response is done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """True when a trivial query succeeds."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
