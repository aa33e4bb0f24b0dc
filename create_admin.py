#!/usr/bin/env python3
"""
Standalone script to create an administrator for the Expense Tracker API
Usage: python create_admin.py
"""

import asyncio
from getpass import getpass
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from app.core.config import settings
from app.core.exceptions import ConflictError
from app.crud.category import seed_default_categories_for_user
from app.services.accounts import ROLE_ADMIN, create_user

async def create_admin():
    print("Creating administrator...")

    # Get user input
    email = input("Enter admin email: ") or "admin@expensetracker.app"
    password = getpass("Enter admin password: ")
    name = input("Enter full name (optional): ") or "System Administrator"

    if not password:
        print("❌ A password is required")
        return

    # Create engine and session maker
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    async_session_maker = async_sessionmaker(engine, expire_on_commit=False)

    try:
        async with async_session_maker() as session:
            admin = await create_user(name, email, password, session, role=ROLE_ADMIN)
            await seed_default_categories_for_user(admin.user_id, session)
            print("✅ Administrator created successfully!")
            print(f"📧 Email: {admin.email}")
            print(f"👤 Name: {admin.name}")
            print(f"🔑 ID: {admin.user_id}")
    except ConflictError as e:
        print(f"❌ {e.message}")
    finally:
        await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_admin())
