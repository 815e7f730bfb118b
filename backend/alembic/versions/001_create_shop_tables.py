"""Create users, products and favorites tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema: `users` (read-only here, resolved by bearer token),
       `products` owned by a user, `favorites` linking a user to a product.
How:   Generic Uuid/DateTime types so the same migration runs on PostgreSQL
       and SQLite. Foreign keys cascade on delete: removing a product
       removes the favorites that point at it.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("token", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_token", "users", ["token"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("image_url", sa.String(512), nullable=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
    )
    # GET /products/category/{category} filters on an exact match
    op.create_index("idx_products_category", "products", ["category"])
    op.create_index("idx_products_owner_id", "products", ["owner_id"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("product_id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_favorites_owner_id", "favorites", ["owner_id"])
    op.create_index("idx_favorites_product_id", "favorites", ["product_id"])


def downgrade() -> None:
    op.drop_index("idx_favorites_product_id", table_name="favorites")
    op.drop_index("idx_favorites_owner_id", table_name="favorites")
    op.drop_table("favorites")
    op.drop_index("idx_products_owner_id", table_name="products")
    op.drop_index("idx_products_category", table_name="products")
    op.drop_table("products")
    op.drop_index("ix_users_token", table_name="users")
    op.drop_table("users")
