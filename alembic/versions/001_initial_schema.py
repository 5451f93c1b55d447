"""Initial schema: users, wallets and projects.

Creates the chain_type and project_type enums and the three tables the
wallet sign-in and project flows use.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CHAIN_TYPES = ("solana", "ethereum", "sui", "xrp", "polygon", "avalanche")
PROJECT_TYPES = ("frontend", "agent")

chain_type = postgresql.ENUM(*CHAIN_TYPES, name="chain_type", create_type=False)
project_type = postgresql.ENUM(*PROJECT_TYPES, name="project_type", create_type=False)


def upgrade() -> None:
    """Create enum types and tables."""
    bind = op.get_bind()
    postgresql.ENUM(*CHAIN_TYPES, name="chain_type").create(bind, checkfirst=True)
    postgresql.ENUM(*PROJECT_TYPES, name="project_type").create(bind, checkfirst=True)

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("username", sa.String(64), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("github_username", sa.String(128), nullable=True),
        sa.Column("github_access_token", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    # --- wallets ---
    op.create_table(
        "wallets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("wallet_address", sa.String(128), nullable=False),
        sa.Column("chain_type", chain_type, nullable=False),
        sa.Column("is_primary", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_wallets"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_wallets_user_id_users", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("wallet_address", name="uq_wallets_wallet_address"),
    )
    op.create_index("ix_wallets_user_id", "wallets", ["user_id"])

    # --- projects ---
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", project_type, nullable=False),
        sa.Column("chain", chain_type, nullable=False),
        sa.Column("generated_code", sa.Text(), nullable=True),
        sa.Column("messages", postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("is_public", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("github_repo_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_projects"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_projects_user_id_users", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_projects_user_id", "projects", ["user_id"])
    op.create_index("ix_projects_updated_at", "projects", ["updated_at"])
    op.create_index(
        "ix_projects_public_created_at",
        "projects",
        ["created_at"],
        postgresql_where=sa.text("is_public"),
    )


def downgrade() -> None:
    """Drop tables, then the enum types they use."""
    op.drop_index("ix_projects_public_created_at", table_name="projects")
    op.drop_index("ix_projects_updated_at", table_name="projects")
    op.drop_index("ix_projects_user_id", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_wallets_user_id", table_name="wallets")
    op.drop_table("wallets")
    op.drop_table("users")

    bind = op.get_bind()
    postgresql.ENUM(name="project_type").drop(bind, checkfirst=True)
    postgresql.ENUM(name="chain_type").drop(bind, checkfirst=True)
