import asyncio
import os
import sys

# Add project root to sys.path
sys.path.append(os.getcwd())

from neonest.core.constants import BABY_PROFILES_KEY
from neonest.db.session import async_session_maker, engine
from neonest.schemas.baby import BabyProfile
from neonest.schemas.milestone import MilestoneRecord
from neonest.store.collection import JsonCollection
from neonest.store.database import DatabaseRecordStore
from neonest.store.keys import milestone_records_key


async def check_data():
    store = DatabaseRecordStore(async_session_maker)
    try:
        print(f"Stored keys: {await store.count()}")
        profiles = JsonCollection(store, BABY_PROFILES_KEY, BabyProfile)
        raw = await store.get(BABY_PROFILES_KEY)
        babies = await profiles.load()
        print(f"Key '{BABY_PROFILES_KEY}': {len(babies)} profiles ({len(raw or '')} bytes)")
        if raw and not babies:
            print("  Profiles payload is unreadable and will be treated as empty")
        for baby in babies:
            key = milestone_records_key(baby.id)
            records = await JsonCollection(store, key, MilestoneRecord).load()
            print(f"Key '{key}' ({baby.name}): {len(records)} records")
    except Exception as e:
        print(f"Error checking DB: {e}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
