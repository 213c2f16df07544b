"""Initial schema: accounts, profiles, listings, favorites, messages, reviews, storage

Revision ID: 001
Revises:
Create Date: 2025-07-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

IMAGE_TYPES = ["image/jpeg", "image/png", "image/webp"]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("raw_metadata", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("seller_type", sa.String(20), nullable=False, server_default="individual"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("seller_type IN ('dealer', 'individual')", name="profiles_seller_type_check"),
    )
    op.create_index("ix_profiles_account_id", "profiles", ["account_id"], unique=True)
    op.create_index("ix_profiles_email", "profiles", ["email"], unique=False)
    op.create_index("ix_profiles_is_admin", "profiles", ["is_admin"], unique=False)

    op.create_table(
        "listings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("brand", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("seller_id", sa.Integer(), nullable=False),
        sa.Column("seller_name", sa.String(255), nullable=False),
        sa.Column("seller_type", sa.String(20), nullable=False, server_default="individual"),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("availability", sa.String(20), nullable=False, server_default="pe_stoc"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["seller_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("availability IN ('pe_stoc', 'la_comanda')", name="listings_availability_check"),
        sa.CheckConstraint("seller_type IN ('dealer', 'individual')", name="listings_seller_type_check"),
        sa.CheckConstraint(
            "category IN ('sport', 'touring', 'cruiser', 'adventure', 'naked', 'enduro', 'scooter', 'chopper')",
            name="listings_category_check",
        ),
        sa.CheckConstraint("status IN ('active', 'pending', 'sold', 'inactive')", name="listings_status_check"),
    )
    op.create_index("ix_listings_seller_id", "listings", ["seller_id"], unique=False)
    op.create_index("ix_listings_status", "listings", ["status"], unique=False)
    op.create_index("ix_listings_category", "listings", ["category"], unique=False)
    op.create_index("ix_listings_featured", "listings", ["featured"], unique=False)
    op.create_index("ix_listings_availability", "listings", ["availability"], unique=False)
    op.create_index("ix_listings_brand", "listings", ["brand"], unique=False)

    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("listing_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("account_id", "listing_id", name="favorites_account_listing_key"),
    )
    op.create_index("ix_favorites_account_id", "favorites", ["account_id"], unique=False)
    op.create_index("ix_favorites_listing_id", "favorites", ["listing_id"], unique=False)

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sender_id", sa.Integer(), nullable=False),
        sa.Column("receiver_id", sa.Integer(), nullable=False),
        sa.Column("listing_id", sa.Integer(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["sender_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["receiver_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["listing_id"], ["listings.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_sender_id", "messages", ["sender_id"], unique=False)
    op.create_index("ix_messages_receiver_id", "messages", ["receiver_id"], unique=False)

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("reviewer_id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["reviewer_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="reviews_rating_check"),
    )
    op.create_index("ix_reviews_reviewer_id", "reviews", ["reviewer_id"], unique=False)
    op.create_index("ix_reviews_profile_id", "reviews", ["profile_id"], unique=False)

    buckets = op.create_table(
        "storage_buckets",
        sa.Column("id", sa.String(63), nullable=False),
        sa.Column("public", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("file_size_limit", sa.Integer(), nullable=False),
        sa.Column("allowed_mime_types", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.bulk_insert(
        buckets,
        [
            {"id": "listing-images", "public": True, "file_size_limit": 5242880, "allowed_mime_types": IMAGE_TYPES},
            {"id": "profile-images", "public": True, "file_size_limit": 2097152, "allowed_mime_types": IMAGE_TYPES},
        ],
    )

    op.create_table(
        "storage_objects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("bucket_id", sa.String(63), nullable=False),
        sa.Column("name", sa.String(1024), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=True),
        sa.Column("content_type", sa.String(100), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("data", sa.LargeBinary(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["bucket_id"], ["storage_buckets.id"]),
        sa.ForeignKeyConstraint(["owner_id"], ["accounts.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("bucket_id", "name", name="storage_objects_bucket_name_key"),
    )
    op.create_index("ix_storage_objects_bucket_id", "storage_objects", ["bucket_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_storage_objects_bucket_id", "storage_objects")
    op.drop_table("storage_objects")
    op.drop_table("storage_buckets")
    op.drop_index("ix_reviews_profile_id", "reviews")
    op.drop_index("ix_reviews_reviewer_id", "reviews")
    op.drop_table("reviews")
    op.drop_index("ix_messages_receiver_id", "messages")
    op.drop_index("ix_messages_sender_id", "messages")
    op.drop_table("messages")
    op.drop_index("ix_favorites_listing_id", "favorites")
    op.drop_index("ix_favorites_account_id", "favorites")
    op.drop_table("favorites")
    for index in ("brand", "availability", "featured", "category", "status", "seller_id"):
        op.drop_index(f"ix_listings_{index}", "listings")
    op.drop_table("listings")
    op.drop_index("ix_profiles_is_admin", "profiles")
    op.drop_index("ix_profiles_email", "profiles")
    op.drop_index("ix_profiles_account_id", "profiles")
    op.drop_table("profiles")
    op.drop_index("ix_accounts_email", "accounts")
    op.drop_table("accounts")
