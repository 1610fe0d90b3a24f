"""SQLAlchemy models for troopfund database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

SQLITE_BUSY_TIMEOUT = 30


class Account(Base):
    """Scout or unit account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    balance = Column(Numeric(12, 2), default=0, nullable=False)
    is_unit_account = Column(Boolean, default=False, nullable=False)

    # At most one row may carry the unit account flag
    __table_args__ = (
        Index(
            "uq_single_unit_account",
            "is_unit_account",
            unique=True,
            sqlite_where=text("is_unit_account = 1"),
            postgresql_where=text("is_unit_account"),
        ),
    )

    # Relationships
    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Ledger transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    transfer_group_id = Column(String(32), nullable=True, index=True)

    # Relationships
    account = relationship("Account", back_populates="transactions")


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String, unique=True, nullable=False)
    role = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class AuditLog(Base):
    """Audit log model."""

    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True)
    principal_id = Column(Integer, nullable=True)
    action_type = Column(String, nullable=False)
    details = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def _configure_sqlite(engine: Engine) -> None:
    """Make every SQLite transaction take the write lock up front.

    pysqlite defers BEGIN until the first write, so two units could both read
    before either writes. Emitting BEGIN IMMEDIATE ourselves serializes units
    that touch the database.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = {"timeout": SQLITE_BUSY_TIMEOUT, "check_same_thread": False}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    if is_sqlite:
        _configure_sqlite(engine)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
