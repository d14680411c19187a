#!/usr/bin/env python3
"""Seed database with demo clients and print their access codes."""

import sys
from pathlib import Path

# Add src to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from staffing_portal.core.database import db_manager
from staffing_portal.core.logging import mask_access_code
from staffing_portal.core.migration import init_database
from staffing_portal.models.client import Client
from staffing_portal.services.access_codes import generate_access_code
import structlog

logger = structlog.get_logger(__name__)

DEMO_CLIENTS = [
    {
        "company_name": "Acme Corporation",
        "contact_name": "John Smith",
        "email": "john.smith@acme.example",
        "phone": "416-555-0001",
    },
    {
        "company_name": "Tech Startup Inc",
        "contact_name": "Sarah Johnson",
        "email": "sarah@techstartup.example",
        "phone": "647-555-0002",
    },
    {
        "company_name": "Global Corp",
        "contact_name": "Michael Chen",
        "email": "mchen@globalcorp.example",
        "phone": "905-555-0003",
    },
]


def seed_clients():
    try:
        init_database()

        with db_manager.get_session() as session:
            for data in DEMO_CLIENTS:
                existing = session.query(Client).filter(Client.company_name == data["company_name"]).first()
                if existing:
                    print(f"   - {existing.company_name} already exists (Code: {mask_access_code(existing.access_code)})")
                    continue

                client = Client(**data, access_code=generate_access_code(), is_active=True)
                session.add(client)
                session.flush()
                print(f"   - {client.company_name}: {client.access_code}")

    except Exception as e:
        logger.error("Client seeding failed", error=str(e))
        print(f"Error seeding clients: {e}")
        sys.exit(1)


if __name__ == "__main__":
    seed_clients()
