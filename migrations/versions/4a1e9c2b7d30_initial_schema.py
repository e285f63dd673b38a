"""initial schema

Revision ID: 4a1e9c2b7d30
Revises:
Create Date: 2026-10-19 09:12:41.218304

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4a1e9c2b7d30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*names: str) -> list[sa.Column]:
    return [sa.Column(n, sa.DateTime(), nullable=False, server_default=sa.func.now()) for n in names]


def upgrade() -> None:
    """Create accounts, audit trail and site content tables."""
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = set(inspector.get_table_names())

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(320), nullable=False, unique=True),
            sa.Column("password_hash", sa.String(255), nullable=False),
            sa.Column("full_name", sa.String(255), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            *_timestamps("created_at"),
        )

    if "user_roles" not in existing_tables:
        op.create_table(
            "user_roles",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("role", sa.String(32), nullable=False, server_default="user"),
            *_timestamps("created_at"),
            sa.UniqueConstraint("user_id", name="uq_user_roles_user_id"),
        )

    if "audit_events" not in existing_tables:
        op.create_table(
            "audit_events",
            sa.Column("id", sa.Integer(), primary_key=True),
            *_timestamps("created_at"),
            sa.Column("request_id", sa.String(64), nullable=True),
            sa.Column("actor_user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
            sa.Column("actor_user_email", sa.String(320), nullable=True),
            sa.Column("action", sa.String(128), nullable=False),
            sa.Column("entity_type", sa.String(128), nullable=True),
            sa.Column("entity_id", sa.String(128), nullable=True),
            sa.Column("metadata_json", sa.Text(), nullable=True),
            sa.Column("client_ip", sa.String(64), nullable=True),
        )
        op.create_index("idx_audit_events_created_at", "audit_events", ["created_at"])

    if "events" not in existing_tables:
        op.create_table(
            "events",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("title", sa.String(255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("event_type", sa.String(32), nullable=False, server_default="workshop"),
            sa.Column("event_date", sa.DateTime(), nullable=False),
            sa.Column("location", sa.String(255), nullable=True),
            sa.Column("max_participants", sa.Integer(), nullable=True),
            sa.Column("registration_deadline", sa.DateTime(), nullable=True),
            sa.Column("image_url", sa.String(1024), nullable=True),
            sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
            *_timestamps("created_at", "updated_at"),
        )
        op.create_index("idx_events_published", "events", ["is_published"])
        op.create_index("idx_events_date", "events", ["event_date"])

    if "event_registrations" not in existing_tables:
        op.create_table(
            "event_registrations",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("email", sa.String(320), nullable=False),
            sa.Column("phone", sa.String(64), nullable=True),
            sa.Column("college", sa.String(255), nullable=True),
            sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
            *_timestamps("created_at"),
        )
        op.create_index("idx_event_registrations_event", "event_registrations", ["event_id"])
        op.create_index("idx_event_registrations_status", "event_registrations", ["status"])

    if "applications" not in existing_tables:
        op.create_table(
            "applications",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("kind", sa.String(32), nullable=False, server_default="internship"),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("email", sa.String(320), nullable=False),
            sa.Column("phone", sa.String(64), nullable=False),
            sa.Column("college", sa.String(255), nullable=False),
            sa.Column("year_of_study", sa.String(64), nullable=False),
            sa.Column("position", sa.String(255), nullable=False),
            sa.Column("portfolio_url", sa.String(1024), nullable=True),
            sa.Column("resume_url", sa.String(1024), nullable=True),
            sa.Column("cover_letter", sa.Text(), nullable=True),
            sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
            *_timestamps("created_at"),
        )
        op.create_index("idx_applications_kind", "applications", ["kind"])
        op.create_index("idx_applications_status", "applications", ["status"])

    if "contact_submissions" not in existing_tables:
        op.create_table(
            "contact_submissions",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("email", sa.String(320), nullable=False),
            sa.Column("subject", sa.String(255), nullable=False),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
            *_timestamps("created_at"),
        )

    if "newsletter_subscriptions" not in existing_tables:
        op.create_table(
            "newsletter_subscriptions",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(320), nullable=False, unique=True),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            *_timestamps("subscribed_at"),
        )

    if "blog_posts" not in existing_tables:
        op.create_table(
            "blog_posts",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("title", sa.String(255), nullable=False),
            sa.Column("slug", sa.String(255), nullable=False, unique=True),
            sa.Column("content", sa.Text(), nullable=False, server_default=""),
            sa.Column("excerpt", sa.Text(), nullable=True),
            sa.Column("category", sa.String(64), nullable=False, server_default="news"),
            sa.Column("cover_image", sa.String(1024), nullable=True),
            sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("published_at", sa.DateTime(), nullable=True),
            *_timestamps("created_at", "updated_at"),
        )
        op.create_index("idx_blog_posts_published", "blog_posts", ["is_published", "published_at"])

    if "products" not in existing_tables:
        op.create_table(
            "products",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("description", sa.Text(), nullable=False, server_default=""),
            sa.Column("short_description", sa.String(512), nullable=True),
            sa.Column("category", sa.String(64), nullable=False, server_default="ai"),
            sa.Column("technologies", sa.JSON(), nullable=False),
            sa.Column("demo_url", sa.String(1024), nullable=True),
            sa.Column("github_url", sa.String(1024), nullable=True),
            sa.Column("image_url", sa.String(1024), nullable=True),
            sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
            *_timestamps("created_at", "updated_at"),
        )

    if "testimonials" not in existing_tables:
        op.create_table(
            "testimonials",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("role", sa.String(255), nullable=False),
            sa.Column("company", sa.String(255), nullable=True),
            sa.Column("content", sa.Text(), nullable=False),
            sa.Column("rating", sa.Integer(), nullable=False, server_default="5"),
            sa.Column("event_name", sa.String(255), nullable=True),
            sa.Column("image_url", sa.String(1024), nullable=True),
            sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
            *_timestamps("created_at", "updated_at"),
        )
        op.create_index("idx_testimonials_public", "testimonials", ["is_approved", "is_featured"])


def downgrade() -> None:
    for table in (
        "testimonials",
        "products",
        "blog_posts",
        "newsletter_subscriptions",
        "contact_submissions",
        "applications",
        "event_registrations",
        "events",
        "audit_events",
        "user_roles",
        "users",
    ):
        op.drop_table(table)
