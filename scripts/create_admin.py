# app/scripts/create_admin.py
"""Create an admin account, or promote and reset an existing one.

    python -m scripts.create_admin admin@example.com 'S3cret!' --name "Admin User"
"""
import argparse
import asyncio
import sys

from core.database import AsyncSessionLocal, create_tables
from core.exceptions import AppError
from core.security import hash_password
from core.store import DocumentStore
from models.user import User, UserRole


async def create_admin(email: str, password: str, full_name: str) -> User:
    email = email.strip().lower()
    async with AsyncSessionLocal() as db:
        store = DocumentStore(db)
        existing = await store.find_one(User, email=email)

        if existing:
            print("ℹ️  Admin user already exists. Updating password and role...")
            user = await store.update_by_id(User, existing.id, {
                "hashed_password": hash_password(password),
                "role": UserRole.ADMIN.value,
            })
            print("✅ Admin user updated successfully!")
        else:
            user = await store.create(
                User,
                email=email,
                hashed_password=hash_password(password),
                full_name=full_name,
                role=UserRole.ADMIN.value,
                is_verified=True,
            )
            print("✅ Admin user created successfully!")

    print(f"   Email: {user.email}")
    print(f"   Role: {user.role}")
    print(f"   ID: {user.id}")
    return user


async def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create or update an admin user")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default="Admin User")
    args = parser.parse_args(argv)

    if len(args.password) < 6:
        print("❌ Password must be at least 6 characters")
        return 1

    try:
        await create_tables()
        await create_admin(args.email, args.password, args.name)
    except AppError as e:
        print(f"❌ Error creating admin user: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
