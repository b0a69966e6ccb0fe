"""initial_portal_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "user_accounts",
        sa.Column("id", sa.String(length=36), nullable=False, comment="User ID (UUID)"),
        sa.Column("email", sa.String(length=255), nullable=False, comment="Lowercased email address"),
        sa.Column(
            "phone_number",
            sa.String(length=11),
            nullable=False,
            comment="Normalized Nigerian mobile number",
        ),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("company", sa.String(length=200), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, comment="Whether the guest can log in"),
        sa.Column("registration_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "last_login",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Timestamp of last successful login",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_user_accounts_email"),
        sa.UniqueConstraint("phone_number", name="uq_user_accounts_phone_number"),
    )
    op.create_index("ix_user_accounts_is_active", "user_accounts", ["is_active"])
    op.create_index("ix_user_accounts_created_at", "user_accounts", ["created_at"])

    op.create_table(
        "admin_accounts",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Admin ID (UUID)"),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=False,
            comment="Hashed password (argon2)",
        ),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_admin_accounts_username"),
        sa.UniqueConstraint("email", name="uq_admin_accounts_email"),
        sa.CheckConstraint("role IN ('admin', 'super_admin')", name="ck_admin_accounts_role"),
    )

    op.create_table(
        "user_sessions",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Session ID (UUID)"),
        sa.Column(
            "user_email",
            sa.String(length=255),
            nullable=False,
            comment="Email of the user (no foreign key)",
        ),
        sa.Column("ip_address", sa.String(length=45), nullable=True),
        sa.Column("mac_address", sa.String(length=17), nullable=True),
        sa.Column(
            "gateway_session_id",
            sa.String(length=100),
            nullable=True,
            comment="Opaque session id supplied by the gateway",
        ),
        sa.Column("session_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "session_end",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="NULL while the session is active",
        ),
        sa.Column("bytes_in", sa.BigInteger(), nullable=False),
        sa.Column("bytes_out", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_sessions_user_email", "user_sessions", ["user_email"])
    op.create_index("ix_user_sessions_session_start", "user_sessions", ["session_start"])
    op.create_index("ix_user_sessions_session_end", "user_sessions", ["session_end"])
    op.create_index("ix_user_sessions_ip_address", "user_sessions", ["ip_address"])

    op.create_table(
        "system_settings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("setting_key", sa.String(length=100), nullable=False),
        sa.Column("setting_value", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("setting_key", name="uq_system_settings_setting_key"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("system_settings")
    op.drop_index("ix_user_sessions_ip_address", table_name="user_sessions")
    op.drop_index("ix_user_sessions_session_end", table_name="user_sessions")
    op.drop_index("ix_user_sessions_session_start", table_name="user_sessions")
    op.drop_index("ix_user_sessions_user_email", table_name="user_sessions")
    op.drop_table("user_sessions")
    op.drop_table("admin_accounts")
    op.drop_index("ix_user_accounts_created_at", table_name="user_accounts")
    op.drop_index("ix_user_accounts_is_active", table_name="user_accounts")
    op.drop_table("user_accounts")
