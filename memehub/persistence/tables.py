"""SQLAlchemy table definitions for MemeGenHub.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("image", Text, nullable=True),
    Column("bio", String(500), nullable=True),
    Column(
        "role",
        Enum("user", "moderator", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# MEMES TABLE
# ============================================================================
memes_table = Table(
    "memes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(100), nullable=False),
    Column("image_url", Text, nullable=False),
    Column("original_image_url", Text, nullable=True),
    Column("top_text", String(200), nullable=True),
    Column("bottom_text", String(200), nullable=True),
    Column("text_color", String(7), nullable=False, server_default="#FFFFFF"),
    Column("font_size", Integer, nullable=False, server_default="32"),
    Column(
        "creator_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE", name="memes_creator_id_fkey"),
        nullable=False,
    ),
    Column(
        "status",
        Enum("draft", "published", name="meme_status", create_type=False),
        nullable=False,
        server_default="draft",
    ),
    Column("views", Integer, nullable=False, server_default="0"),
    # Running total of votes.value for this meme
    Column("votes", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "is_template_of",
        UUID,
        ForeignKey("memes.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("views >= 0", name="memes_views_non_negative"),
    CheckConstraint("comment_count >= 0", name="memes_comment_count_non_negative"),
)

Index("idx_memes_creator_id", memes_table.c.creator_id)
Index(
    "idx_memes_status_created_at",
    memes_table.c.status,
    memes_table.c.created_at.desc(),
)
Index("idx_memes_status_votes", memes_table.c.status, memes_table.c.votes.desc())

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("meme_id", UUID, ForeignKey("memes.id", ondelete="CASCADE"), nullable=False),
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE", name="votes_user_id_fkey"),
        nullable=False,
    ),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("meme_id", "user_id", name="uq_vote_meme_user"),
    CheckConstraint("value IN (1, -1)", name="votes_value_up_or_down"),
)

Index("idx_votes_user_id", votes_table.c.user_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("meme_id", UUID, ForeignKey("memes.id", ondelete="CASCADE"), nullable=False),
    Column(
        "creator_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE", name="comments_creator_id_fkey"),
        nullable=False,
    ),
    Column("text", String(140), nullable=False),
    Column("flagged", Boolean, nullable=False, server_default="false"),
    Column("flag_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("flag_count >= 0", name="comments_flag_count_non_negative"),
)

Index(
    "idx_comments_meme_id_created_at",
    comments_table.c.meme_id,
    comments_table.c.created_at.desc(),
)
Index(
    "idx_comments_flagged",
    comments_table.c.flag_count.desc(),
    postgresql_where=comments_table.c.flagged.is_(True),
)

# ============================================================================
# COMMENT FLAGS TABLE
# ============================================================================
comment_flags_table = Table(
    "comment_flags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE", name="comment_flags_user_id_fkey"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="uq_comment_flag_comment_user"),
)

Index("idx_comment_flags_user_id", comment_flags_table.c.user_id)
