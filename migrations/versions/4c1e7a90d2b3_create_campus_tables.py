"""create_campus_tables

Revision ID: 4c1e7a90d2b3
Revises:
Create Date: 2026-03-01 10:12:44.318204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1e7a90d2b3"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create profiles, threads, posts and comments; enable RLS and realtime.

    ``profiles.id`` mirrors ``auth.users.id`` so a deleted auth user takes
    their profile, posts and comments with them.
    """
    op.create_table(
        "profiles",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("college", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.execute(
        "ALTER TABLE profiles ADD CONSTRAINT fk_profiles_auth_users "
        "FOREIGN KEY (id) REFERENCES auth.users (id) ON DELETE CASCADE;"
    )

    op.create_table(
        "threads",
        sa.Column("id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["thread_id"], ["threads.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_posts_author_id", "posts", ["author_id"], unique=False)
    op.create_index("ix_posts_thread_id", "posts", ["thread_id"], unique=False)
    op.create_index("ix_posts_created_at", "posts", ["created_at"], unique=False)

    op.create_table(
        "comments",
        sa.Column("id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_post_id", "comments", ["post_id"], unique=False)

    # --- Row Level Security ---
    # The API connects as a role that bypasses RLS; these policies govern
    # direct client access (including realtime delivery).
    for table in ["profiles", "threads", "posts", "comments"]:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING ((SELECT auth.role()) = 'authenticated');
    """)
    op.execute("""
        CREATE POLICY profiles_insert ON profiles
            FOR INSERT WITH CHECK (id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY profiles_update ON profiles
            FOR UPDATE USING (id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY threads_select ON threads
            FOR SELECT USING ((SELECT auth.role()) = 'authenticated');
    """)
    # Posts and comments: readable by any signed-in user, written as oneself
    for table in ["posts", "comments"]:
        op.execute(f"""
            CREATE POLICY {table}_select ON {table}
                FOR SELECT USING ((SELECT auth.role()) = 'authenticated');
        """)
        op.execute(f"""
            CREATE POLICY {table}_insert ON {table}
                FOR INSERT WITH CHECK (author_id = (SELECT auth.uid()));
        """)

    # --- Realtime: stream post INSERTs to subscribers ---
    op.execute("ALTER PUBLICATION supabase_realtime ADD TABLE posts;")


def downgrade() -> None:
    """Drop campus tables, policies and the realtime registration."""
    op.execute("ALTER PUBLICATION supabase_realtime DROP TABLE posts;")

    for table in ["posts", "comments"]:
        op.execute(f"DROP POLICY IF EXISTS {table}_insert ON {table};")
        op.execute(f"DROP POLICY IF EXISTS {table}_select ON {table};")
    op.execute("DROP POLICY IF EXISTS threads_select ON threads;")
    for action in ["update", "insert", "select"]:
        op.execute(f"DROP POLICY IF EXISTS profiles_{action} ON profiles;")

    op.drop_index("ix_comments_post_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_posts_created_at", table_name="posts")
    op.drop_index("ix_posts_thread_id", table_name="posts")
    op.drop_index("ix_posts_author_id", table_name="posts")
    op.drop_table("posts")
    op.drop_table("threads")
    op.drop_table("profiles")
