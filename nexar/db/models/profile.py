"""
Profile model - public seller/buyer record, one per account.
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nexar.db.base import Base, TimestampMixin
from nexar.db.models.enums import SellerType, sql_in

if TYPE_CHECKING:
    from nexar.db.models.account import Account
    from nexar.db.models.listing import Listing


class Profile(TimestampMixin, Base):
    """Profile entity. is_admin is the only source of administrative privilege."""

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint(f"seller_type IN ({sql_in(SellerType)})", name="profiles_seller_type_check"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), unique=True, index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    seller_type: Mapped[str] = mapped_column(String(20), nullable=False, default=SellerType.INDIVIDUAL.value)
    is_admin: Mapped[bool] = mapped_column(default=False, nullable=False, index=True)
    verified: Mapped[bool] = mapped_column(default=False, nullable=False)

    account: Mapped["Account"] = relationship("Account", back_populates="profile")
    listings: Mapped[list["Listing"]] = relationship("Listing", back_populates="seller", lazy="noload")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email})>"
