"""initial marketplace schema

Revision ID: 5c1e2a9d7b30
Revises:
Create Date: 2026-10-16 10:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from packhub.domain.constants import (
    USER_ROLES, PACKAGING_TYPES, MATERIAL_TYPES, INQUIRY_STATUSES,
    RATING_MIN, RATING_MAX, sql_in_list,
)


# revision identifiers, used by Alembic.
revision: str = '5c1e2a9d7b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id",             sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email",          sa.String(255), nullable=False),
        sa.Column("password_hash",  sa.String(255), nullable=False),
        sa.Column("company_name",   sa.String(200), nullable=False),
        sa.Column("contact_person", sa.String(200), nullable=False),
        sa.Column("phone",          sa.String(50)),
        sa.Column("role",           sa.String(20), nullable=False),
        sa.Column("location",       sa.String(200), nullable=False),
        sa.Column("description",    sa.Text()),
        sa.Column("website",        sa.String(500)),
        sa.Column("created_at",     sa.DateTime(), nullable=False),
        sa.Column("updated_at",     sa.DateTime(), nullable=False),
        sa.UniqueConstraint("email"),
        sa.CheckConstraint(f"role in ({sql_in_list(USER_ROLES)})", name="ck_users_role"),
    )

    op.create_table(
        "supplier_profiles",
        sa.Column("id",                        sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id",                   sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("packaging_types",           sa.JSON(), nullable=False),
        sa.Column("materials",                 sa.JSON(), nullable=False),
        sa.Column("certifications",            sa.JSON(), nullable=False),
        sa.Column("min_order_quantity",        sa.Integer(), nullable=False),
        sa.Column("personalization_available", sa.Boolean(), nullable=False),
        sa.Column("price_range_min",           sa.DECIMAL(10, 2)),
        sa.Column("price_range_max",           sa.DECIMAL(10, 2)),
        sa.Column("delivery_time_days",        sa.Integer(), nullable=False),
        sa.Column("created_at",                sa.DateTime(), nullable=False),
        sa.Column("updated_at",                sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id"),
        sa.CheckConstraint("min_order_quantity > 0", name="ck_supplier_profiles_moq_positive"),
        sa.CheckConstraint("delivery_time_days > 0", name="ck_supplier_profiles_delivery_positive"),
    )

    op.create_table(
        "inquiries",
        sa.Column("id",                     sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("buyer_id",               sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("packaging_type",         sa.String(30), nullable=False),
        sa.Column("material",               sa.String(30), nullable=False),
        sa.Column("quantity",               sa.Integer(), nullable=False),
        sa.Column("personalization_needed", sa.Boolean(), nullable=False),
        sa.Column("description",            sa.Text(), nullable=False),
        sa.Column("budget_min",             sa.DECIMAL(10, 2)),
        sa.Column("budget_max",             sa.DECIMAL(10, 2)),
        sa.Column("delivery_deadline",      sa.DateTime()),
        sa.Column("status",                 sa.String(20), nullable=False),
        sa.Column("created_at",             sa.DateTime(), nullable=False),
        sa.Column("updated_at",             sa.DateTime(), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_inquiries_quantity_positive"),
        sa.CheckConstraint(f"status in ({sql_in_list(INQUIRY_STATUSES)})", name="ck_inquiries_status"),
        sa.CheckConstraint(f"packaging_type in ({sql_in_list(PACKAGING_TYPES)})", name="ck_inquiries_packaging_type"),
        sa.CheckConstraint(f"material in ({sql_in_list(MATERIAL_TYPES)})", name="ck_inquiries_material"),
    )
    op.create_index("ix_inquiries_buyer_id", "inquiries", ["buyer_id"], unique=False)

    op.create_table(
        "inquiry_suppliers",
        sa.Column("id",          sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("inquiry_id",  sa.Integer(), sa.ForeignKey("inquiries.id"), nullable=False),
        sa.Column("supplier_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("sent_at",     sa.DateTime(), nullable=False),
        sa.UniqueConstraint("inquiry_id", "supplier_id", name="uq_inquiry_suppliers_pair"),
    )
    op.create_index("ix_inquiry_suppliers_inquiry_id",  "inquiry_suppliers", ["inquiry_id"], unique=False)
    op.create_index("ix_inquiry_suppliers_supplier_id", "inquiry_suppliers", ["supplier_id"], unique=False)

    op.create_table(
        "quotes",
        sa.Column("id",                 sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("inquiry_id",         sa.Integer(), sa.ForeignKey("inquiries.id"), nullable=False),
        sa.Column("supplier_id",        sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("price_per_unit",     sa.DECIMAL(10, 2), nullable=False),
        sa.Column("total_price",        sa.DECIMAL(10, 2), nullable=False),
        sa.Column("delivery_time_days", sa.Integer(), nullable=False),
        sa.Column("notes",              sa.Text()),
        sa.Column("created_at",         sa.DateTime(), nullable=False),
        sa.CheckConstraint("price_per_unit > 0", name="ck_quotes_price_positive"),
        sa.CheckConstraint("total_price > 0", name="ck_quotes_total_positive"),
        sa.CheckConstraint("delivery_time_days > 0", name="ck_quotes_delivery_positive"),
    )
    op.create_index("ix_quotes_inquiry_id",  "quotes", ["inquiry_id"], unique=False)
    op.create_index("ix_quotes_supplier_id", "quotes", ["supplier_id"], unique=False)

    op.create_table(
        "messages",
        sa.Column("id",           sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("sender_id",    sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("recipient_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("inquiry_id",   sa.Integer(), sa.ForeignKey("inquiries.id")),
        sa.Column("subject",      sa.String(300), nullable=False),
        sa.Column("content",      sa.Text(), nullable=False),
        sa.Column("sent_at",      sa.DateTime(), nullable=False),
        sa.Column("read_at",      sa.DateTime()),
    )
    op.create_index("ix_messages_sender_id",    "messages", ["sender_id"], unique=False)
    op.create_index("ix_messages_recipient_id", "messages", ["recipient_id"], unique=False)

    op.create_table(
        "file_attachments",
        sa.Column("id",          sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("inquiry_id",  sa.Integer(), sa.ForeignKey("inquiries.id")),
        sa.Column("message_id",  sa.Integer(), sa.ForeignKey("messages.id")),
        sa.Column("filename",    sa.String(255), nullable=False),
        sa.Column("file_path",   sa.String(1000), nullable=False),
        sa.Column("file_size",   sa.Integer(), nullable=False),
        sa.Column("mime_type",   sa.String(120), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("inquiry_id IS NOT NULL OR message_id IS NOT NULL", name="ck_file_attachments_owner"),
        sa.CheckConstraint("file_size > 0", name="ck_file_attachments_size_positive"),
    )
    op.create_index("ix_file_attachments_inquiry_id", "file_attachments", ["inquiry_id"], unique=False)
    op.create_index("ix_file_attachments_message_id", "file_attachments", ["message_id"], unique=False)

    op.create_table(
        "ratings",
        sa.Column("id",         sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("rater_id",   sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("rated_id",   sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("inquiry_id", sa.Integer(), sa.ForeignKey("inquiries.id")),
        sa.Column("rating",     sa.Integer(), nullable=False),
        sa.Column("comment",    sa.Text()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(f"rating BETWEEN {RATING_MIN} AND {RATING_MAX}", name="ck_ratings_range"),
        sa.UniqueConstraint("rater_id", "rated_id", "inquiry_id", name="uq_ratings_triple"),
    )
    op.create_index("ix_ratings_rater_id", "ratings", ["rater_id"], unique=False)
    op.create_index("ix_ratings_rated_id", "ratings", ["rated_id"], unique=False)


def downgrade():
    op.drop_index("ix_ratings_rated_id", table_name="ratings")
    op.drop_index("ix_ratings_rater_id", table_name="ratings")
    op.drop_table("ratings")

    op.drop_index("ix_file_attachments_message_id", table_name="file_attachments")
    op.drop_index("ix_file_attachments_inquiry_id", table_name="file_attachments")
    op.drop_table("file_attachments")

    op.drop_index("ix_messages_recipient_id", table_name="messages")
    op.drop_index("ix_messages_sender_id",    table_name="messages")
    op.drop_table("messages")

    op.drop_index("ix_quotes_supplier_id", table_name="quotes")
    op.drop_index("ix_quotes_inquiry_id",  table_name="quotes")
    op.drop_table("quotes")

    op.drop_index("ix_inquiry_suppliers_supplier_id", table_name="inquiry_suppliers")
    op.drop_index("ix_inquiry_suppliers_inquiry_id",  table_name="inquiry_suppliers")
    op.drop_table("inquiry_suppliers")

    op.drop_index("ix_inquiries_buyer_id", table_name="inquiries")
    op.drop_table("inquiries")

    op.drop_table("supplier_profiles")
    op.drop_table("users")
