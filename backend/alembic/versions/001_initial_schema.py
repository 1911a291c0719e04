"""Initial database schema - products with weighted full-text search vector

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from catalog.core.config import settings
from catalog.search.text_index import search_vector_sql

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- Products ---
    op.create_table(
        "products",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sku", sa.String(100), nullable=False),
        sa.Column("name", sa.String(500), nullable=False),
        sa.Column("variant_name", sa.String(200)),
        sa.Column("manufacturer", sa.String(200), nullable=False),
        sa.Column("manufacturer_number", sa.String(200)),
        sa.Column("product_group", sa.String(200)),
        sa.Column("category", sa.String(200)),
        sa.Column("description", sa.Text),
        sa.Column("image_url", sa.String(1000)),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column(
            "search_vector",
            postgresql.TSVECTOR,
            sa.Computed(search_vector_sql(settings.SEARCH_LANGUAGE), persisted=True),
        ),
    )
    op.create_index("ix_products_sku", "products", ["sku"], unique=True)
    op.create_index("idx_products_search", "products", ["search_vector"], postgresql_using="gin")
    op.create_index("idx_products_manufacturer", "products", ["manufacturer"])
    op.create_index("idx_products_category", "products", ["category"])
    op.create_index(
        "idx_products_active", "products", ["active"], postgresql_where=sa.text("active = true")
    )


def downgrade() -> None:
    op.drop_index("idx_products_active", table_name="products")
    op.drop_index("idx_products_category", table_name="products")
    op.drop_index("idx_products_manufacturer", table_name="products")
    op.drop_index("idx_products_search", table_name="products")
    op.drop_index("ix_products_sku", table_name="products")
    op.drop_table("products")
