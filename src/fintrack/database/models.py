"""SQLAlchemy models for fintrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(String, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False, default="expense")
    color = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")


class Transaction(Base):
    """Transaction model. Timestamps are stored as naive UTC."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    date = Column(DateTime, nullable=False, index=True)
    # Decimal text, kept at the precision it was entered with
    amount = Column(String, nullable=False)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False)
    type = Column(String, nullable=False, default="expense")
    description = Column(String, nullable=False, default="")
    notes = Column(String, nullable=True)
    tags = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
