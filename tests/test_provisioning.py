"""
Profile provisioning tests - signup hook defaults, swallowed failures, reconciliation sweep.
"""

import pytest
from prometheus_client import REGISTRY
from sqlalchemy import func, select

from nexar.config import get_settings
from nexar.db.models import Account, Profile
from nexar.services.provisioning import provision_profile, reconcile_profiles


def _failures():
    return REGISTRY.get_sample_value("nexar_profile_provisioning_failures_total") or 0


async def _account(session, email, **metadata):
    account = Account(email=email, hashed_password="x", raw_metadata=metadata)
    session.add(account)
    await session.flush()
    await session.refresh(account)
    return account


@pytest.mark.asyncio
async def test_profile_copies_signup_metadata(session):
    account = await _account(
        session, "dealer@example.com", name="Moto SRL", phone="0722000000", location="Iași", sellerType="dealer"
    )
    profile = await provision_profile(session, account)
    assert profile.account_id == account.id
    assert profile.name == "Moto SRL"
    assert profile.phone == "0722000000"
    assert profile.location == "Iași"
    assert profile.seller_type == "dealer"
    assert profile.email == "dealer@example.com"
    assert profile.is_admin is False
    assert profile.verified is False


@pytest.mark.asyncio
async def test_missing_metadata_gets_defaults(session):
    account = await _account(session, "maria.ionescu@example.com")
    profile = await provision_profile(session, account)
    assert profile.name == "maria.ionescu"
    assert profile.phone == ""
    assert profile.location == ""
    assert profile.seller_type == "individual"


@pytest.mark.asyncio
async def test_failed_insert_keeps_account(session):
    account = await _account(session, "broken@example.com", sellerType="wholesaler")
    account_id = account.id
    before = _failures()
    assert await provision_profile(session, account) is None
    assert _failures() == before + 1
    # The outer transaction survives the failed savepoint
    assert await session.get(Account, account_id) is not None
    count = await session.scalar(select(func.count()).select_from(Profile))
    assert count == 0


@pytest.mark.asyncio
async def test_reconcile_creates_missing_profiles_once(session):
    broken = await _account(session, "broken@example.com", sellerType="wholesaler", name="Ignored")
    broken_id = broken.id
    assert await provision_profile(session, broken) is None
    ok = await _account(session, "ok@example.com")
    await provision_profile(session, ok)

    report = await reconcile_profiles(session)
    assert report.as_dict() == {"created": 1, "failed": 0, "promoted": 0}
    repaired = await session.scalar(select(Profile).where(Profile.account_id == broken_id))
    # Repaired profiles ignore metadata
    assert repaired.name == "broken"
    assert repaired.seller_type == "individual"

    again = await reconcile_profiles(session)
    assert again.as_dict() == {"created": 0, "failed": 0, "promoted": 0}


@pytest.mark.asyncio
async def test_reconcile_promotes_configured_admins(session):
    account = await _account(session, "ops@example.com")
    profile = await provision_profile(session, account)

    report = await reconcile_profiles(session, ["ops@example.com", "nobody@example.com"])
    assert report.promoted == 1
    await session.refresh(profile)
    assert profile.is_admin is True

    assert (await reconcile_profiles(session, ["ops@example.com"])).promoted == 0


@pytest.mark.asyncio
async def test_configured_admin_is_admin_from_signup(session, monkeypatch):
    monkeypatch.setattr(get_settings(), "admin_emails", ["ops@example.com"])
    admin = await provision_profile(session, await _account(session, "ops@example.com"))
    regular = await provision_profile(session, await _account(session, "buyer@example.com"))
    assert admin.is_admin is True
    assert regular.is_admin is False
