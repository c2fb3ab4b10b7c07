#!/usr/bin/env python3
"""
Database setup script for ClinicDesk.

This script performs:
1. Collection index creation (unique IDs, single-receptionist index)
2. Bootstrap admin seeding
3. Database health checks

Usage:
    python scripts/setup_database.py --full-setup
    python scripts/setup_database.py --indexes-only
    python scripts/setup_database.py --seed-admin --admin-user admin --admin-password secret
    python scripts/setup_database.py --health-check
"""

import argparse
import asyncio
import sys
from typing import Any, Dict

# Add the src directory to the Python path
sys.path.insert(0, 'src')

from clinicdesk.adapters.db.mongo.gateway import MongoDataGateway, connect_mongo_gateway
from clinicdesk.adapters.db.mongo.models.clinic_m import TABLE_MODELS
from clinicdesk.application.use_cases.manage_users import ensure_admin
from clinicdesk.core.config import get_settings
from clinicdesk.core.exceptions import DatabaseError


async def health_check(gateway: MongoDataGateway) -> Dict[str, Any]:
    """Ping the server and report document and index counts per collection."""
    print("🏥 Performing database health check...")
    await gateway.ping()

    status: Dict[str, Any] = {}
    for table, model in TABLE_MODELS.items():
        collection = model.get_motor_collection()
        count = await collection.count_documents({})
        indexes = await collection.list_indexes().to_list(None)
        status[table.value] = {"documents": count, "indexes": [idx.get("name") for idx in indexes]}
        print(f"   {table.value}: {count} documents, indexes={status[table.value]['indexes']}")

    has_receptionist_index = "uniq_receptionist" in status["users"]["indexes"]
    print(f"   Single-receptionist index: {'Yes' if has_receptionist_index else 'No'}")
    return status


async def seed_admin(gateway: MongoDataGateway, user_id: str, password: str, department: str) -> bool:
    settings = get_settings()
    created = await ensure_admin(
        gateway, user_id, password, department, settings.security.password_hash_iterations
    )
    if created:
        print(f"✅ Admin '{user_id}' created")
    else:
        print("ℹ️  An admin already exists (or the user ID is taken); nothing seeded")
    return created


async def main() -> int:
    parser = argparse.ArgumentParser(description="ClinicDesk database setup")
    parser.add_argument("--full-setup", action="store_true", help="Build indexes, seed admin, health check")
    parser.add_argument("--indexes-only", action="store_true", help="Only build collection indexes")
    parser.add_argument("--seed-admin", action="store_true", help="Seed an admin account if none exists")
    parser.add_argument("--health-check", action="store_true", help="Report collection status")
    parser.add_argument("--admin-user", default=None, help="Admin user ID (defaults to BOOTSTRAP_ADMIN_USER_ID)")
    parser.add_argument("--admin-password", default=None, help="Admin password (defaults to BOOTSTRAP_ADMIN_PASSWORD)")
    args = parser.parse_args()

    if not any([args.full_setup, args.indexes_only, args.seed_admin, args.health_check]):
        parser.print_help()
        return 1

    settings = get_settings()
    if settings.database.backend != "mongo":
        print("❌ MONGO_BACKEND must be 'mongo' for database setup")
        return 1

    # init_beanie builds every declared index
    print(f"⚡ Connecting to {settings.database.db_name} and building indexes...")
    gateway = await connect_mongo_gateway(settings.database)
    try:
        if args.full_setup or args.seed_admin:
            user_id = args.admin_user or settings.bootstrap.admin_user_id
            password = args.admin_password or settings.bootstrap.admin_password
            if not user_id or not password:
                print("❌ Admin user ID and password are required to seed an admin")
                return 1
            await seed_admin(gateway, user_id, password, settings.bootstrap.admin_department)

        if args.full_setup or args.health_check:
            await health_check(gateway)
    except DatabaseError as e:
        print(f"❌ Database setup failed: {e}")
        return 1
    finally:
        await gateway.close()

    print("🎉 Done")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
