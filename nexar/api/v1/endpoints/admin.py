"""
Admin endpoints - maintenance operations for accounts with profiles.is_admin.
"""

from fastapi import APIRouter

from nexar.config import get_settings
from nexar.core.dependencies import AdminIdentity
from nexar.db.session import DbSession
from nexar.services.provisioning import reconcile_profiles

router = APIRouter()


@router.post("/profiles/reconcile")
async def reconcile(session: DbSession, identity: AdminIdentity):
    """Run the profile repair sweep inline. Same work as reconcile_profiles_task."""
    report = await reconcile_profiles(session, get_settings().admin_emails)
    return report.as_dict()
