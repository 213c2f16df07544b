"""Enumerated column values shared by models, schemas and policies."""

from enum import Enum


class Category(str, Enum):
    SPORT = "sport"
    TOURING = "touring"
    CRUISER = "cruiser"
    ADVENTURE = "adventure"
    NAKED = "naked"
    ENDURO = "enduro"
    SCOOTER = "scooter"
    CHOPPER = "chopper"


class SellerType(str, Enum):
    DEALER = "dealer"
    INDIVIDUAL = "individual"


class Availability(str, Enum):
    """Dealer stock state. Stored values are the ones the database constraint accepts."""

    IN_STOCK = "pe_stoc"
    ON_ORDER = "la_comanda"


class ListingStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    SOLD = "sold"
    INACTIVE = "inactive"


def sql_in(enum_cls: type[Enum]) -> str:
    """Render enum values as a SQL IN list for check constraints."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
