"""initial_schema

Create the schema for MemeGenHub:
- Users (with moderator role)
- Memes (running vote total and comment count)
- Votes (one up/down vote per user per meme)
- Comments (flag count and flagged state)
- Comment flags (one flag per user per comment)

Revision ID: 3c1f9a27d4e0
Revises:
Create Date: 2026-10-18 10:12:44.310582

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a27d4e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE user_role AS ENUM ('user', 'moderator');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE meme_status AS ENUM ('draft', 'published');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("bio", sa.String(500), nullable=True),
        sa.Column(
            "role",
            postgresql.ENUM("user", "moderator", name="user_role", create_type=False),
            nullable=False,
            server_default="user",
        ),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )

    # ========================================================================
    # MEMES table
    # ========================================================================
    op.create_table(
        "memes",
        _id_column(),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("original_image_url", sa.Text(), nullable=True),
        sa.Column("top_text", sa.String(200), nullable=True),
        sa.Column("bottom_text", sa.String(200), nullable=True),
        sa.Column(
            "text_color", sa.String(7), nullable=False, server_default="#FFFFFF"
        ),
        sa.Column("font_size", sa.Integer(), nullable=False, server_default="32"),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM("draft", "published", name="meme_status", create_type=False),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comment_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_template_of", sa.UUID(), nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["creator_id"], ["users.id"], ondelete="CASCADE", name="memes_creator_id_fkey"
        ),
        sa.ForeignKeyConstraint(["is_template_of"], ["memes.id"], ondelete="SET NULL"),
        sa.CheckConstraint("views >= 0", name="memes_views_non_negative"),
        sa.CheckConstraint(
            "comment_count >= 0", name="memes_comment_count_non_negative"
        ),
    )
    op.create_index("idx_memes_creator_id", "memes", ["creator_id"])
    op.create_index(
        "idx_memes_status_created_at",
        "memes",
        ["status", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_memes_status_votes", "memes", ["status", sa.text("votes DESC")]
    )

    # ========================================================================
    # VOTES table (the ledger behind memes.votes)
    # ========================================================================
    op.create_table(
        "votes",
        _id_column(),
        sa.Column("meme_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["meme_id"], ["memes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="votes_user_id_fkey"
        ),
        sa.UniqueConstraint("meme_id", "user_id", name="uq_vote_meme_user"),
        sa.CheckConstraint("value IN (1, -1)", name="votes_value_up_or_down"),
    )
    op.create_index("idx_votes_user_id", "votes", ["user_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        _id_column(),
        sa.Column("meme_id", sa.UUID(), nullable=False),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        sa.Column("text", sa.String(140), nullable=False),
        sa.Column("flagged", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("flag_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["meme_id"], ["memes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["creator_id"], ["users.id"], ondelete="CASCADE", name="comments_creator_id_fkey"
        ),
        sa.CheckConstraint("flag_count >= 0", name="comments_flag_count_non_negative"),
    )
    op.create_index(
        "idx_comments_meme_id_created_at",
        "comments",
        ["meme_id", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_comments_flagged",
        "comments",
        [sa.text("flag_count DESC")],
        postgresql_where=sa.text("flagged IS TRUE"),
    )

    # ========================================================================
    # COMMENT_FLAGS table
    # ========================================================================
    op.create_table(
        "comment_flags",
        _id_column(),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="comment_flags_user_id_fkey"
        ),
        sa.UniqueConstraint(
            "comment_id", "user_id", name="uq_comment_flag_comment_user"
        ),
    )
    op.create_index("idx_comment_flags_user_id", "comment_flags", ["user_id"])

    # Trigger function to maintain updated_at
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in ("users", "memes", "votes", "comments"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("comments", "votes", "memes", "users"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("comment_flags")
    op.drop_table("comments")
    op.drop_table("votes")
    op.drop_table("memes")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS meme_status")
    op.execute("DROP TYPE IF EXISTS user_role")
