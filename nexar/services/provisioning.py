"""
Profile provisioning - create the profile row for a new account.
Challenge: Signup must never fail because the profile insert failed.
Design: provision_profile() runs in a savepoint and swallows database errors (logged + counted);
reconcile_profiles() is the idempotent sweep that repairs whatever provisioning missed.
"""

import logging
from dataclasses import dataclass
from typing import Any

from prometheus_client import Counter
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nexar.config import get_settings
from nexar.db.models.account import Account
from nexar.db.models.enums import SellerType
from nexar.db.models.profile import Profile
from nexar.db.repositories.account_repository import AccountRepository
from nexar.db.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

PROVISIONING_FAILURES = Counter(
    "nexar_profile_provisioning_failures_total",
    "Profile inserts that failed during signup or reconciliation",
)


def _coalesce(value: Any, default: Any) -> Any:
    return default if value is None else value


def profile_from_metadata(account: Account, *, use_metadata: bool = True) -> Profile:
    """Build the profile row from signup metadata, with defaults for absent keys.

    Emails listed in ADMIN_EMAILS get the admin flag as soon as the profile exists.
    """
    meta = (account.raw_metadata or {}) if use_metadata else {}
    return Profile(
        account_id=account.id,
        name=_coalesce(meta.get("name"), account.email.split("@", 1)[0]),
        email=account.email,
        phone=_coalesce(meta.get("phone"), ""),
        location=_coalesce(meta.get("location"), ""),
        seller_type=_coalesce(meta.get("sellerType"), SellerType.INDIVIDUAL.value),
        is_admin=account.email in get_settings().admin_emails,
        verified=False,
    )


async def provision_profile(session: AsyncSession, account: Account, *, use_metadata: bool = True) -> Profile | None:
    """Best-effort profile insert for a freshly flushed account. Returns None on failure."""
    account_id = account.id
    profile = profile_from_metadata(account, use_metadata=use_metadata)
    try:
        async with session.begin_nested():
            session.add(profile)
            await session.flush()
    except SQLAlchemyError as exc:
        PROVISIONING_FAILURES.inc()
        logger.warning("Failed to create profile for account %s: %s", account_id, exc)
        return None
    await session.refresh(profile)
    return profile


@dataclass
class ReconcileReport:
    created: int = 0
    failed: int = 0
    promoted: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"created": self.created, "failed": self.failed, "promoted": self.promoted}


async def reconcile_profiles(session: AsyncSession, admin_emails: list[str] | None = None) -> ReconcileReport:
    """Create missing profiles and grant admin to configured emails. Safe to run repeatedly.

    Repaired profiles use plain defaults and ignore signup metadata.
    """
    report = ReconcileReport()
    for account in await AccountRepository(session).get_without_profile():
        account_id = account.id
        if await provision_profile(session, account, use_metadata=False) is None:
            report.failed += 1
        else:
            report.created += 1
            logger.info("Created missing profile for account %s", account_id)
    report.promoted = await ProfileRepository(session).promote_admins(list(admin_emails or []))
    logger.info(
        "profile reconciliation: created=%d failed=%d promoted=%d", report.created, report.failed, report.promoted
    )
    return report
