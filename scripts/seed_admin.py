#!/usr/bin/env python3
"""Seed database with the first admin user."""

import os
import sys
from pathlib import Path

# Add src to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from staffing_portal.core.database import db_manager
from staffing_portal.core.migration import init_database
from staffing_portal.auth.models import AdminUser
from staffing_portal.auth.utils import get_password_hash
import structlog

logger = structlog.get_logger(__name__)


def seed_admin():
    username = os.getenv("ADMIN_USERNAME", "admin")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        print("Set ADMIN_PASSWORD to seed the admin user")
        sys.exit(1)

    try:
        init_database()

        with db_manager.get_session() as session:
            user = session.query(AdminUser).filter(AdminUser.username == username).first()

            if not user:
                session.add(AdminUser(
                    username=username,
                    hashed_password=get_password_hash(password),
                    is_admin=True,
                    is_active=True
                ))
                print(f"Created admin user: {username}")
            else:
                print(f"Admin user {username} already exists - Updating password")
                user.hashed_password = get_password_hash(password)

    except Exception as e:
        logger.error("Admin seeding failed", error=str(e))
        print(f"Error seeding database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    seed_admin()
