#!/usr/bin/env python3
"""
Repair sweep: create profiles for accounts whose signup provisioning failed,
and grant admin to the emails in ADMIN_EMAILS. Idempotent; run as often as needed.
  python scripts/reconcile_profiles.py            # inline, straight against DATABASE_URL
  python scripts/reconcile_profiles.py --queue    # hand off to the Celery worker
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from nexar.config import get_settings
from nexar.queue.tasks import _reconcile, reconcile_profiles_task


def main():
    ap = argparse.ArgumentParser(description="Reconcile missing profiles")
    ap.add_argument("--queue", action="store_true", help="Enqueue reconcile_profiles_task instead of running inline")
    args = ap.parse_args()

    if args.queue:
        reconcile_profiles_task.delay()
        print("Enqueued reconcile_profiles_task. Ensure Celery worker is running.")
        return

    settings = get_settings()
    report = asyncio.run(_reconcile(settings.database_url, settings.admin_emails))
    print(f"Created {report['created']} missing profiles, {report['failed']} failed, promoted {report['promoted']} admins.")


if __name__ == "__main__":
    main()
