"""initial schema

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"

down_revision = None

branch_labels = None

depends_on = None


def upgrade() -> None:
    op.create_table(
        "saved_summaries",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("account_id", sa.String(length=128), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("quiz_data", sa.JSON(), nullable=True),
        sa.Column("revision_data", sa.JSON(), nullable=True),
        sa.Column("input_type", sa.String(length=16), nullable=False),
        sa.Column("input_value", sa.Text(), nullable=False),
        sa.Column("output_format", sa.String(length=16), nullable=False),
        sa.Column("target_language", sa.String(length=8), nullable=False),
        sa.Column("summary_length", sa.String(length=16), nullable=False),
        sa.Column("source_url", sa.String(length=1024), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_saved_summaries_account_id", "saved_summaries", ["account_id"])
    op.create_index("ix_saved_summaries_created_at", "saved_summaries", ["created_at"])

    op.create_table(
        "audio_assets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("summary_id", sa.String(length=32), sa.ForeignKey("saved_summaries.id"), nullable=False),
        sa.Column("content_hash", sa.String(length=64), nullable=False),
        sa.Column("language", sa.String(length=8), nullable=False),
        sa.Column("file_path", sa.String(length=1024), nullable=False),
        sa.Column("format", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audio_assets_summary_id", "audio_assets", ["summary_id"])
    op.create_index("ix_audio_assets_content_hash", "audio_assets", ["content_hash"])

    op.create_table(
        "user_preferences",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("account_id", sa.String(length=128), nullable=False),
        sa.Column("default_language", sa.String(length=8), nullable=False),
        sa.Column("default_summary_length", sa.String(length=16), nullable=False),
        sa.Column("notify_download_success", sa.Boolean(), nullable=False),
        sa.Column("notify_share_success", sa.Boolean(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_user_preferences_account_id", "user_preferences", ["account_id"], unique=True)


def downgrade() -> None:
    op.drop_table("user_preferences")
    op.drop_table("audio_assets")
    op.drop_table("saved_summaries")
