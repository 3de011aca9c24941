"""
Database Configuration Module

Rate cards, couriers and the pincode master are read far more often than they
are written, so the engine opens short-lived sessions per lookup.

Connection Strategy:
- DATABASE_URL wins when set (sqlite URLs are used for local runs and tests)
- Otherwise a PostgreSQL URI is built from db_user/db_password/db_host/db_port/db_name
- PostgreSQL: QueuePool, pool_size=10, max_overflow=10
- SQLite: a single shared connection (StaticPool) so every thread sees the same data
"""

import os
from datetime import datetime
from urllib.parse import quote_plus
import uuid as uuid
from pytz import timezone
from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import Column, TIMESTAMP, Boolean, Integer, Uuid, create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from logger import logging


# ============================================
# DATABASE CONNECTION CONFIGURATION
# ============================================

DBTYPE_POSTGRES = "postgresql"


def build_database_uri() -> str:
    database_url = os.environ.get("DATABASE_URL")
    if database_url:
        return database_url

    return "%s://%s:%s@%s:%s/%s" % (
        DBTYPE_POSTGRES,
        os.environ.get("db_user"),
        quote_plus(os.environ.get("db_password", "")),
        os.environ.get("db_host"),
        os.environ.get("db_port"),
        os.environ.get("db_name"),
    )


CORE_SQLALCHEMY_DATABASE_URI = build_database_uri()

# ============================================
# CONNECTION POOL SETTINGS
# ============================================

POOL_CONFIG = {
    # Base pool size - always maintain this many connections
    "pool_size": 10,
    # Additional connections allowed during fan-out peaks
    "max_overflow": 10,
    # Timeout waiting for a connection from pool (seconds)
    "pool_timeout": 30,
    # Test connection health before using (handles stale connections)
    "pool_pre_ping": True,
    # Recycle connections after 30 minutes (prevents stale connections)
    "pool_recycle": 1800,
    "echo": False,
    "poolclass": QueuePool,
}

SQLITE_CONFIG = {
    "connect_args": {"check_same_thread": False},
    "poolclass": StaticPool,
    "echo": False,
}


def create_db_engine(database_uri: str):
    if database_uri.startswith("sqlite"):
        return create_engine(database_uri, **SQLITE_CONFIG)
    return create_engine(database_uri, **POOL_CONFIG)


db_engine = create_db_engine(CORE_SQLALCHEMY_DATABASE_URI)

# ============================================
# SESSION CONFIGURATION
# ============================================

SessionLocal = sessionmaker(
    autoflush=False,
    bind=db_engine,
    expire_on_commit=False,
)

# Timezone configuration
UTC = timezone("UTC")


def time_now():
    """Get current UTC time"""
    return datetime.now(UTC)


# ============================================
# CONNECTION POOL MONITORING
# ============================================


@event.listens_for(db_engine, "checkout")
def receive_checkout(dbapi_connection, connection_record, connection_proxy):
    """Log when connection is checked out from pool"""
    logging.debug("Connection checked out from pool")


@event.listens_for(db_engine, "checkin")
def receive_checkin(dbapi_connection, connection_record):
    """Log when connection is returned to pool"""
    logging.debug("Connection returned to pool")


# ============================================
# DECLARATIVE BASE
# ============================================

DBBase = declarative_base()


def init_models(engine=None):
    """Create any missing tables. Safe to call on every startup."""
    import models  # noqa: F401  registers every table on DBBase.metadata

    DBBase.metadata.create_all(bind=engine or db_engine)


# ============================================
# BASE MODEL CLASS
# ============================================


class DBBaseClass:
    """
    Base class for all database models.

    Provides:
    - Auto-incrementing primary key (id)
    - UUID for external references
    - Created/updated timestamps
    - Soft delete flag
    """

    # Primary key
    id = Column(Integer, primary_key=True, unique=True, autoincrement=True)

    # UUID for external API references (don't expose internal IDs)
    uuid = Column(Uuid(as_uuid=True), default=uuid.uuid4, unique=True, nullable=False)

    # Timestamps
    created_at = Column(TIMESTAMP(timezone=True), default=time_now, nullable=False)
    updated_at = Column(
        TIMESTAMP(timezone=True),
        default=time_now,
        onupdate=time_now,
        nullable=False,
    )

    # Soft delete
    is_deleted = Column(Boolean, default=False, index=True)
