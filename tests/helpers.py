"""Shared helpers for the staffing portal test suite."""

from datetime import datetime, timedelta
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from staffing_portal.core.base import Base
import staffing_portal.models  # noqa: F401


def make_engine(url: str = "sqlite://"):
    """Create a SQLite engine with every table in place."""
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url == "sqlite://":
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)
    Base.metadata.create_all(bind=engine)
    return engine


def make_session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def job_posting_form(**overrides) -> Dict:
    """A valid public job posting payload."""
    form = {
        "contact_name": "Jane Doe",
        "company_name": "Initech",
        "email": "jane.doe@initech-mail.com",
        "phone": "416-555-0123",
        "job_title": "Warehouse Associate",
        "location": "Mississauga, ON",
        "employment_type": "permanent",
        "job_description": "Pick and pack orders",
        "salary_range": "$18-$20/hr",
        "anticipated_start_date": "2026-11-02",
    }
    form.update(overrides)
    return form


def code_request_form(**overrides) -> Dict:
    """A valid public code request payload."""
    form = {
        "company_name": "Globex",
        "contact_name": "Hank Scorpio",
        "email": "hank@globex-mail.com",
        "phone": "647-555-0142",
        "reason": "We want to post jobs faster",
    }
    form.update(overrides)
    return form


def backdate(db: Session, instance, field: str = "updated_at", days: int = 1) -> datetime:
    """Push a timestamp into the past so later changes are observable."""
    value = datetime.utcnow() - timedelta(days=days)
    setattr(instance, field, value)
    db.commit()
    return value


class RecordingMailer:
    """Mailer stand-in that keeps sent messages in memory."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent = []

    def send(self, to_address: str, subject: str, body: str) -> bool:
        self.sent.append((to_address, subject, body))
        return self.succeed
