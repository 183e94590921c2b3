"""
Backfill Identity Script
Fills in empty usernames and display names on existing profiles by deriving
them from first/last name. Usernames already taken by another profile are
skipped and reported. Can be run manually after bulk imports.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.database.supabase_client import get_service_supabase
from app.modules.identity.deriver import derive_display_name, derive_username
from app.modules.profiles.service import ProfileService
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def find_incomplete_profiles(supabase: Client):
    """Profiles missing a username or a display name"""
    result = supabase.table("profiles")\
        .select("id, first_name, last_name, username, display_name")\
        .order("id")\
        .execute()
    return [
        p for p in result.data or []
        if not p.get("username") or not p.get("display_name")
    ]


def backfill_profiles(supabase: Client):
    logger.info("Backfilling usernames and display names...")
    profiles = find_incomplete_profiles(supabase)
    lookups = ProfileService(supabase)
    updated_count = 0
    skipped_count = 0

    for profile in profiles:
        update_data = {}
        if not profile.get("display_name"):
            display_name = derive_display_name(profile.get("first_name"), profile.get("last_name"))
            if display_name:
                update_data["display_name"] = display_name
        if not profile.get("username"):
            username = derive_username(profile.get("first_name"), profile.get("last_name"))
            try:
                available = bool(username) and lookups.is_username_available(username, profile["id"])
            except Exception as e:
                logger.error(f"Error checking username {username!r} for profile {profile['id']}: {e}")
                skipped_count += 1
                continue
            if available:
                update_data["username"] = username
            elif username:
                logger.warning(f"Username {username!r} already taken; profile {profile['id']} needs manual review")
                skipped_count += 1

        if not update_data:
            continue
        try:
            supabase.table("profiles")\
                .update(update_data)\
                .eq("id", profile["id"])\
                .execute()
            updated_count += 1
            logger.debug(f"Updated profile {profile['id']}: {update_data}")
        except Exception as e:
            logger.error(f"Error updating profile {profile['id']}: {e}")

    logger.info(f"Profiles backfilled: {updated_count} updated, {skipped_count} skipped")
    return updated_count, skipped_count


def main():
    supabase = get_service_supabase()
    backfill_profiles(supabase)


if __name__ == "__main__":
    main()
