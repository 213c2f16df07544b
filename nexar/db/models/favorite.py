"""Favorite model - a listing bookmarked by an account."""


from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nexar.db.base import Base, CreatedAtMixin


class Favorite(CreatedAtMixin, Base):
    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("account_id", "listing_id", name="favorites_account_listing_key"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    listing_id: Mapped[int] = mapped_column(ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Favorite(account_id={self.account_id}, listing_id={self.listing_id})>"
