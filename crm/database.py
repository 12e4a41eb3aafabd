import logging
import time

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import (
    DATABASE_URL,
    DB_LOG_SLOW_QUERIES,
    DB_MAX_OVERFLOW,
    DB_POOL_RECYCLE,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
    DB_SLOW_QUERY_THRESHOLD,
)

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Pool settings for server databases; SQLite gets its own pool class"""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Test connections before using
        "pool_recycle": DB_POOL_RECYCLE,
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
    }


try:
    engine = create_engine(DATABASE_URL, echo=False, **_engine_options(DATABASE_URL))
    logger.info("✅ Database engine created successfully")
except Exception as e:
    logger.error(f"❌ Failed to create database engine: {e}")
    raise


def install_slow_query_logging(target_engine, threshold: float = DB_SLOW_QUERY_THRESHOLD) -> None:
    """Warn about statements slower than ``threshold`` seconds"""

    @event.listens_for(target_engine, "before_cursor_execute")
    def before_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
        conn.info.setdefault("query_start_time", []).append(time.time())

    @event.listens_for(target_engine, "after_cursor_execute")
    def after_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
        total = time.time() - conn.info["query_start_time"].pop(-1)
        if total > threshold:
            logger.warning(f"🐌 Slow query ({total:.2f}s): {statement[:200]}...")


if DB_LOG_SLOW_QUERIES:
    install_slow_query_logging(engine)
    logger.info(f"📊 Slow query logging enabled (threshold: {DB_SLOW_QUERY_THRESHOLD}s)")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
