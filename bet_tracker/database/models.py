"""
SQLAlchemy ORM models for the bet tracking system.

Defines database schema for users, picks, parlays and bankroll history.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    DateTime,
    Engine,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    create_engine,
    event,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
    sessionmaker,
)
from sqlalchemy.pool import StaticPool

from bet_tracker.config.constants import (
    BankrollTransactionType,
    BetType,
    PickStatus,
    Sport,
)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class User(Base):
    """Account owning picks, parlays and bankroll history."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    starting_bankroll: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    # Metadata
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    picks: Mapped[list["Pick"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    parlays: Mapped[list["Parlay"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    bankroll_history: Mapped[list["BankrollHistory"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )


class Pick(Base):
    """A single recorded bet."""

    __tablename__ = "picks"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    sport: Mapped[Sport] = mapped_column(Enum(Sport), nullable=False)
    bet_type: Mapped[BetType] = mapped_column(Enum(BetType), nullable=False)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    odds: Mapped[int] = mapped_column(Integer, nullable=False)  # American odds
    stake: Mapped[float] = mapped_column(Float, nullable=False)
    potential_win: Mapped[float] = mapped_column(Float, nullable=False)  # Profit if won

    status: Mapped[PickStatus] = mapped_column(
        Enum(PickStatus), default=PickStatus.PENDING, nullable=False
    )
    game_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    settled_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="picks")
    parlay_legs: Mapped[list["ParlayLeg"]] = relationship(
        back_populates="pick", passive_deletes=True
    )

    __table_args__ = (
        Index("ix_picks_user_status", "user_id", "status"),
        Index("ix_picks_created", "created_at"),
    )


class Parlay(Base):
    """Combined multi-leg bet."""

    __tablename__ = "parlays"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    total_odds: Mapped[int] = mapped_column(Integer, nullable=False)  # American odds
    stake: Mapped[float] = mapped_column(Float, nullable=False)
    potential_win: Mapped[float] = mapped_column(Float, nullable=False)

    status: Mapped[PickStatus] = mapped_column(
        Enum(PickStatus), default=PickStatus.PENDING, nullable=False
    )
    settled_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="parlays")
    legs: Mapped[list["ParlayLeg"]] = relationship(
        back_populates="parlay", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_parlays_user_status", "user_id", "status"),)


class ParlayLeg(Base):
    """Join row between a parlay and one of its picks."""

    __tablename__ = "parlay_legs"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    parlay_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("parlays.id", ondelete="CASCADE"), nullable=False, index=True
    )
    pick_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("picks.id"), nullable=False, index=True
    )

    parlay: Mapped["Parlay"] = relationship(back_populates="legs")
    pick: Mapped["Pick"] = relationship(back_populates="parlay_legs")


class BankrollHistory(Base):
    """Track bankroll changes over time."""

    __tablename__ = "bankroll_history"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, nullable=False, index=True
    )

    # Signed change to the balance
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[BankrollTransactionType] = mapped_column(
        Enum(BankrollTransactionType), nullable=False
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    related_pick_id: Mapped[Optional[str]] = mapped_column(
        String(32), ForeignKey("picks.id", ondelete="SET NULL"), nullable=True, index=True
    )
    related_parlay_id: Mapped[Optional[str]] = mapped_column(
        String(32), ForeignKey("parlays.id", ondelete="SET NULL"), nullable=True, index=True
    )

    user: Mapped["User"] = relationship(back_populates="bankroll_history")
    pick: Mapped[Optional["Pick"]] = relationship()
    parlay: Mapped[Optional["Parlay"]] = relationship()

    __table_args__ = (Index("ix_bankroll_history_user_type", "user_id", "type"),)


def get_engine(database_url: str) -> Engine:
    """
    Get SQLAlchemy engine for database operations.

    SQLite connections are shared across FastAPI's worker threads, and an
    in-memory SQLite database is pinned to a single connection so every
    session sees the same data.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        SQLAlchemy Engine
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    options: dict = {"connect_args": {"check_same_thread": False}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_db(engine: Engine) -> None:
    """
    Initialize the database with all tables.

    Args:
        engine: Engine bound to the target database
    """
    Base.metadata.create_all(engine)


def get_session_factory(engine: Engine) -> sessionmaker:
    """Build the per-request session factory."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
