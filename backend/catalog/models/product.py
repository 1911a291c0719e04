"""Product model."""

from sqlalchemy import Boolean, Computed, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import TSVECTOR
from sqlalchemy.orm import Mapped, mapped_column

from catalog.core.config import settings
from catalog.db.base import Base
from catalog.models.mixins import TimestampMixin
from catalog.search.text_index import search_vector_sql


class Product(TimestampMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        Index("idx_products_search", "search_vector", postgresql_using="gin"),
        Index("idx_products_manufacturer", "manufacturer"),
        Index("idx_products_category", "category"),
        Index("idx_products_active", "active", postgresql_where=text("active = true")),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    variant_name: Mapped[str | None] = mapped_column(String(200))
    manufacturer: Mapped[str] = mapped_column(String(200), nullable=False)
    manufacturer_number: Mapped[str | None] = mapped_column(String(200))
    product_group: Mapped[str | None] = mapped_column(String(200))
    category: Mapped[str | None] = mapped_column(String(200))  # flattened leaf
    description: Mapped[str | None] = mapped_column(Text)  # sanitized HTML
    image_url: Mapped[str | None] = mapped_column(String(1000))
    active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=text("true"), nullable=False
    )

    # Maintained by PostgreSQL on every write, never assigned.
    search_vector: Mapped[str | None] = mapped_column(
        TSVECTOR, Computed(search_vector_sql(settings.SEARCH_LANGUAGE), persisted=True)
    )

    def __repr__(self) -> str:
        return f"<Product {self.sku}: {self.name}>"
