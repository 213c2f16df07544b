"""
Listing model - a motorcycle for sale.
"""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nexar.db.base import Base, TimestampMixin
from nexar.db.models.enums import Availability, Category, ListingStatus, SellerType, sql_in

if TYPE_CHECKING:
    from nexar.db.models.profile import Profile


class Listing(TimestampMixin, Base):
    """Listing entity. Used by the storefront, REST CRUD and Elasticsearch indexing."""

    __tablename__ = "listings"
    __table_args__ = (
        CheckConstraint(f"availability IN ({sql_in(Availability)})", name="listings_availability_check"),
        CheckConstraint(f"seller_type IN ({sql_in(SellerType)})", name="listings_seller_type_check"),
        CheckConstraint(f"category IN ({sql_in(Category)})", name="listings_category_check"),
        CheckConstraint(f"status IN ({sql_in(ListingStatus)})", name="listings_status_check"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    brand: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    year: Mapped[int] = mapped_column(nullable=False)
    mileage: Mapped[int] = mapped_column(nullable=False, default=0)
    price: Mapped[int] = mapped_column(nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    seller_id: Mapped[int] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    seller_name: Mapped[str] = mapped_column(String(255), nullable=False)
    seller_type: Mapped[str] = mapped_column(String(20), nullable=False, default=SellerType.INDIVIDUAL.value)
    featured: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)
    availability: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Availability.IN_STOCK.value, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ListingStatus.ACTIVE.value, index=True)

    seller: Mapped["Profile"] = relationship("Profile", back_populates="listings")

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, title={self.title})>"
