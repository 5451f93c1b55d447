"""ORM models: users, their wallets, and their generated-code projects."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dapp0.chains.registry import ChainType
from dapp0.db.base import Base


class ProjectType(str, Enum):
    """What a project's generated code is."""

    FRONTEND = "frontend"
    AGENT = "agent"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


# Native enum types on PostgreSQL, CHECK constraints elsewhere. validate_strings
# rejects unknown values before they reach the database.
chain_type_enum = SAEnum(
    ChainType,
    name="chain_type",
    values_callable=_enum_values,
    create_constraint=True,
    validate_strings=True,
)
project_type_enum = SAEnum(
    ProjectType,
    name="project_type",
    values_callable=_enum_values,
    create_constraint=True,
    validate_strings=True,
)

JSONVariant = JSON().with_variant(JSONB(), "postgresql")


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table. Profile fields stay null until profile setup."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True)
    username: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    github_username: Mapped[str | None] = mapped_column(String(128), nullable=True)
    github_access_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    wallets: Mapped[list[Wallet]] = relationship(
        "Wallet", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    projects: Mapped[list[Project]] = relationship(
        "Project", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )


# ---------------------------------------------------------------------------
# Wallets
# ---------------------------------------------------------------------------


class Wallet(Base):
    """Proof-of-ownership binding between a chain address and a user."""

    __tablename__ = "wallets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    wallet_address: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    chain_type: Mapped[ChainType] = mapped_column(chain_type_enum, nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    user: Mapped[User] = relationship("User", back_populates="wallets")


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class Project(Base):
    """A generated-code artifact plus the chat transcript that produced it."""

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[ProjectType] = mapped_column(project_type_enum, nullable=False)
    chain: Mapped[ChainType] = mapped_column(chain_type_enum, nullable=False)
    generated_code: Mapped[str | None] = mapped_column(Text, nullable=True)
    messages: Mapped[list[Any]] = mapped_column(JSONVariant, default=list, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    github_repo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False, index=True
    )

    user: Mapped[User] = relationship("User", back_populates="projects")
