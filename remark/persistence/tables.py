"""SQLAlchemy table definitions for comments.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# post_id and author_id reference entities owned by other services,
# so they carry no foreign keys.
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("post_id", UUID(as_uuid=True), nullable=False),
    Column(
        "parent_id",
        UUID(as_uuid=True),
        nullable=True,
    ),
    Column("author_id", UUID(as_uuid=True), nullable=False),
    Column("content", Text, nullable=False),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("deleted_by", UUID(as_uuid=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("likes_count >= 0", name="likes_count_non_negative"),
)

# Listing: WHERE post_id = ? ORDER BY created_at, id
Index(
    "idx_comments_post_created",
    comments_table.c.post_id,
    comments_table.c.created_at,
    comments_table.c.id,
)
# Replies: WHERE post_id = ? AND parent_id = ?
Index(
    "idx_comments_post_parent",
    comments_table.c.post_id,
    comments_table.c.parent_id,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
