"""
Account model - the authenticated identity a profile is provisioned for.
"""

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nexar.db.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from nexar.db.models.profile import Profile


class Account(CreatedAtMixin, Base):
    """Login identity. Signup metadata is kept raw; the profile row carries the cleaned values."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    raw_metadata: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    profile: Mapped["Profile | None"] = relationship("Profile", back_populates="account", uselist=False)

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email={self.email})>"
