# app/scripts/seed_data.py
"""Default communication methods and donation reasons.

Each table is only seeded while it is empty, so the script can run on every
deploy.
"""
import asyncio

from core.database import AsyncSessionLocal, create_tables
from core.store import DocumentStore
from models.communication_method import CommunicationMethod
from models.donation_reason import DonationReason

# ========== communication methods ==========
COMMUNICATION_METHODS = [
    {
        "name": "Email",
        "type": "email",
        "value": "contact@example.org",
        "icon": "mail",
        "order": 1,
    },
    {
        "name": "Telegram",
        "type": "telegram",
        "value": "@donations",
        "icon": "message-circle",
        "order": 2,
    },
]

# ========== donation reasons ==========
DONATION_REASONS = [
    {
        "title": "Supporting Education",
        "description": "Helping provide quality education to children in underserved communities",
    },
    {
        "title": "Healthcare Support",
        "description": "Funding essential healthcare services for communities in need",
    },
    {
        "title": "Mentorship Programs",
        "description": "Supporting mentorship and skill development programs",
    },
]


async def seed_table(store: DocumentStore, entity, rows: list, label: str) -> int:
    if await store.count(entity):
        print(f"ℹ️  {label} already exist, skipping...")
        return 0

    for row in rows:
        await store.create(entity, **row)
    print(f"✅ Seeded {len(rows)} {label.lower()}")
    return len(rows)


async def seed():
    await create_tables()
    async with AsyncSessionLocal() as db:
        store = DocumentStore(db)
        await seed_table(store, CommunicationMethod, COMMUNICATION_METHODS, "Communication methods")
        await seed_table(store, DonationReason, DONATION_REASONS, "Donation reasons")

    print("\n" + "=" * 50)
    print("✅ Seeding completed!")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(seed())
