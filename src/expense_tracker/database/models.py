"""SQLAlchemy models for expense_tracker database."""

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
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Money account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    name = Column(String, nullable=False)
    initial_balance = Column(Numeric(12, 2), nullable=False, default=0)
    current_balance = Column(Numeric(12, 2), nullable=False, default=0)
    total_spent = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="account")


class Category(Base):
    """Expense category model. System defaults have a NULL user_id."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=True, index=True)
    name = Column(String, nullable=False)
    color = Column(String(7), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    expenses = relationship("Expense", back_populates="category")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    source = Column(String, nullable=False, default="manual")
    merchant_id = Column(Integer, nullable=True)
    merchant_name = Column(String, nullable=True)
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (Index("ix_expenses_user_date", "user_id", "date"),)

    # Relationships
    account = relationship("Account", back_populates="expenses")
    category = relationship("Category", back_populates="expenses")


class MerchantPattern(Base):
    """Merchant-name categorization rule model."""

    __tablename__ = "merchant_patterns"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False)
    merchant_name = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    match_type = Column(String, nullable=False, default="exact")
    is_active = Column(Boolean, default=True, nullable=False)
    use_count = Column(Integer, default=0, nullable=False)
    last_used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (Index("ix_merchant_patterns_user_active", "user_id", "is_active"),)


def _configure_sqlite_connection(dbapi_conn, _record) -> None:
    # Let SQLAlchemy emit BEGIN itself, see _begin_immediate
    dbapi_conn.isolation_level = None
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.close()


def _begin_immediate(conn) -> None:
    """Take the write lock when a transaction starts.

    pysqlite defers BEGIN until the first write, so a read followed by a write
    in one unit of work could act on stale data. With BEGIN IMMEDIATE a second
    writer waits (up to the driver busy timeout) until the first commits.
    """
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str) -> Engine:
    """Create an engine and make sure the schema exists."""
    engine = create_engine(database_url, echo=False)
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _configure_sqlite_connection)
        event.listen(engine, "begin", _begin_immediate)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
