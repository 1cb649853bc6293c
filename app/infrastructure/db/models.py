"""
Database Models (SQLAlchemy ORM)
Users, sessions and user-owned investments
"""

import uuid

from sqlalchemy import (
    Column, Integer, String, Numeric, Date, DateTime,
    ForeignKey, Index
)
from sqlalchemy.orm import relationship

from app.infrastructure.db.database import Base
from app.utils.time import now_utc_naive


def _new_id() -> str:
    return str(uuid.uuid4())


class UserModel(Base):
    """User record (identity provider subject)"""
    __tablename__ = "users"

    id = Column(String(255), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=True, unique=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String(1024), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    investments = relationship(
        "InvestmentModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sessions = relationship(
        "UserSessionModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UserSessionModel(Base):
    """Bearer session (token stored as SHA-256 hex)"""
    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(64), nullable=False, unique=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    user = relationship("UserModel", back_populates="sessions")

    # Indexes
    __table_args__ = (
        Index('ix_user_sessions_expires_at', 'expires_at'),
    )


class InvestmentModel(Base):
    """Manually entered stock holding"""
    __tablename__ = "investments"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    symbol = Column(String(10), nullable=False)
    company_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    purchase_price = Column(Numeric(10, 2), nullable=False)
    current_price = Column(Numeric(10, 2), nullable=False)
    purchase_date = Column(Date, nullable=False)

    created_at = Column(DateTime, nullable=False, default=now_utc_naive)
    updated_at = Column(DateTime, nullable=False, default=now_utc_naive)

    # Relationships
    user = relationship("UserModel", back_populates="investments")

    # Indexes
    __table_args__ = (
        Index('ix_investments_user_created', 'user_id', 'created_at'),
    )
