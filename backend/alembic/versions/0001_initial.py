"""Initial schema: users, cargo tracking, website content.

Revision ID: 0001
Revises:
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None


def upgrade():
    # ── Accounts ───────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="admin"),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    # ── Cargo tracking ─────────────────────────────────────────
    op.create_table(
        "cargo",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("tracking_number", sa.String(50), nullable=False),
        sa.Column("customer_name", sa.Text(), nullable=False),
        sa.Column("customer_phone", sa.Text(), nullable=False),
        sa.Column("sales_rep_name", sa.Text(), nullable=False),
        sa.Column("cargo_description", sa.Text(), nullable=False),
        sa.Column("origin", sa.Text()),
        sa.Column("destination", sa.Text()),
        sa.Column("weight", sa.Text()),
        sa.Column("dimensions", sa.Text()),
        sa.Column("status", sa.String(30), nullable=False, server_default="received"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_cargo_tracking_number", "cargo", ["tracking_number"], unique=True)
    op.create_index("ix_cargo_status", "cargo", ["status"])

    op.create_table(
        "cargo_flight_segments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("cargo_id", sa.Integer(), sa.ForeignKey("cargo.id"), nullable=False),
        sa.Column("flight_number", sa.String(20), nullable=False),
        sa.Column("airline", sa.Text()),
        sa.Column("departure_airport", sa.Text(), nullable=False),
        sa.Column("arrival_airport", sa.Text(), nullable=False),
        sa.Column("departure_time", sa.DateTime(), nullable=False),
        sa.Column("arrival_time", sa.DateTime(), nullable=False),
        sa.Column("pieces", sa.String(50)),
        sa.Column("weight", sa.String(50)),
        sa.Column("volume", sa.String(50)),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index(
        "ix_cargo_flight_segments_cargo_id", "cargo_flight_segments", ["cargo_id"]
    )

    op.create_table(
        "cargo_status_history",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("cargo_id", sa.Integer(), sa.ForeignKey("cargo.id"), nullable=False),
        sa.Column("status", sa.String(100), nullable=False),
        sa.Column("details", sa.Text()),
        sa.Column("location", sa.Text()),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_cargo_status_history_cargo_id", "cargo_status_history", ["cargo_id"]
    )
    op.create_index(
        "ix_cargo_status_history_timestamp", "cargo_status_history", ["timestamp"]
    )

    # ── Website content ────────────────────────────────────────
    op.create_table(
        "branches",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("incharge", sa.String(255), nullable=False, server_default="Unknown"),
        sa.Column("location", sa.Text()),
        sa.Column("is_main_office", sa.Boolean(), server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("excerpt", sa.Text()),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("cover_image", sa.String(500)),
        sa.Column("category", sa.String(100), nullable=False, server_default="General"),
        sa.Column("is_published", sa.Boolean(), server_default=sa.false()),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_blog_posts_slug", "blog_posts", ["slug"], unique=True)
    op.create_index("ix_blog_posts_is_published", "blog_posts", ["is_published"])

    op.create_table(
        "testimonials",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("customer_location", sa.String(255)),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), server_default="5"),
        sa.Column("is_approved", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_testimonials_is_approved", "testimonials", ["is_approved"])

    op.create_table(
        "seo_settings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("page", sa.String(100), nullable=False, unique=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("keywords", sa.Text()),
        sa.Column("og_image", sa.String(500)),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "faqs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("answer", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "contact_submissions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50)),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )


def downgrade():
    for table in (
        "contact_submissions",
        "faqs",
        "seo_settings",
        "testimonials",
        "blog_posts",
        "branches",
        "cargo_status_history",
        "cargo_flight_segments",
        "cargo",
        "users",
    ):
        op.drop_table(table)
