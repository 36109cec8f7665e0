"""create feedback links, feedback, admin settings and credentials

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c2a9d7b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "feedback_links",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("customer_number", sa.String(length=64), nullable=False),
        sa.Column("concern", sa.String(length=100), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("feedback_url", sa.String(length=500), nullable=False),
        sa.Column("qr_code_url", sa.String(length=1000), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_feedback_links_created_at", "feedback_links", ["created_at"], unique=False)
    op.create_index("ix_feedback_links_customer_number", "feedback_links", ["customer_number"], unique=False)

    op.create_table(
        "feedback",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("customer", sa.String(length=64), nullable=False),
        sa.Column("customer_name", sa.String(length=201), nullable=False),
        sa.Column("concern", sa.String(length=100), nullable=False),
        sa.Column("ref_id", sa.String(length=36), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating_range"),
        sa.ForeignKeyConstraint(["ref_id"], ["feedback_links.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("ref_id"),
    )
    op.create_index("ix_feedback_timestamp", "feedback", ["timestamp"], unique=False)

    op.create_table(
        "admin_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("domains", sa.JSON(), nullable=False),
        sa.Column("concern_texts", sa.JSON(), nullable=False),
        sa.Column("concern_types", sa.JSON(), nullable=False),
        sa.Column("settings_version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "admin_settings_revisions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("settings_version", sa.Integer(), nullable=False),
        sa.Column("snapshot", sa.JSON(), nullable=False),
        sa.Column("saved_by", sa.String(length=150), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_settings_revisions_created_at", "admin_settings_revisions", ["created_at"], unique=False)

    op.create_table(
        "admin_credentials",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )


def downgrade():
    op.drop_table("admin_credentials")
    op.drop_index("ix_admin_settings_revisions_created_at", table_name="admin_settings_revisions")
    op.drop_table("admin_settings_revisions")
    op.drop_table("admin_settings")
    op.drop_index("ix_feedback_timestamp", table_name="feedback")
    op.drop_table("feedback")
    op.drop_index("ix_feedback_links_customer_number", table_name="feedback_links")
    op.drop_index("ix_feedback_links_created_at", table_name="feedback_links")
    op.drop_table("feedback_links")
