"""Job posting confirmation and internal notification emails."""

from typing import Optional

import structlog

from staffing_portal.core.config import settings
from staffing_portal.email.mailer import Mailer
from staffing_portal.models.job_posting import JobPosting

logger = structlog.get_logger(__name__)


class NotificationService:
    """Formats and dispatches job posting emails.

    Sending is best effort: a failed send is logged and never raised.
    """

    def __init__(self, mailer: Optional[Mailer] = None, enabled: Optional[bool] = None):
        self.mailer = mailer
        self.enabled = settings.email_notifications_enabled if enabled is None else enabled

    def _get_mailer(self) -> Mailer:
        if self.mailer is None:
            self.mailer = Mailer()
        return self.mailer

    @staticmethod
    def confirmation_body(posting: JobPosting) -> str:
        if posting.is_existing_client:
            next_step = "As an existing client, your job posting will be prioritized for immediate processing."
        else:
            next_step = (
                "As a new client, we will discuss our services, pricing, and contract terms "
                "before posting your job."
            )

        return (
            f"Dear {posting.contact_name},\n\n"
            f"Thank you for submitting your job posting for {posting.job_title} at {posting.company_name}.\n\n"
            "We have received your request and a member of our recruiting team will contact you "
            "within one business day.\n\n"
            f"{next_step}\n\n"
            "Best regards,\n"
            "The Recruiting Team"
        )

    @staticmethod
    def internal_body(posting: JobPosting) -> str:
        lines = [
            f"Job posting ID: {posting.id}",
            f"Client type: {'Existing client' if posting.is_existing_client else 'New client'}",
            "",
            f"Company: {posting.company_name}",
            f"Contact: {posting.contact_name}",
            f"Email: {posting.email}",
            f"Phone: {posting.phone}",
            "",
            f"Job title: {posting.job_title}",
            f"Location: {posting.location}",
            f"Employment type: {posting.employment_type}",
            f"Start date: {posting.anticipated_start_date or 'Not specified'}",
            f"Salary range: {posting.salary_range or 'Not specified'}",
        ]
        if posting.job_description:
            lines += ["", "Job description:", posting.job_description]
        if posting.special_requirements:
            lines += ["", "Special requirements:", posting.special_requirements]
        return "\n".join(lines)

    def notify_job_posting_received(self, posting: JobPosting) -> int:
        """Send the submitter confirmation and the internal alert.

        Returns:
            Number of emails sent
        """
        if not self.enabled:
            logger.debug("Email notifications disabled", job_posting_id=str(posting.id))
            return 0

        mailer = self._get_mailer()
        sent = 0

        if mailer.send(posting.email, "Job Posting Received", self.confirmation_body(posting)):
            sent += 1

        if settings.internal_notification_email:
            subject = f"New Job Posting: {posting.job_title} at {posting.company_name}"
            if mailer.send(settings.internal_notification_email, subject, self.internal_body(posting)):
                sent += 1

        logger.info("Job posting notifications dispatched", job_posting_id=str(posting.id), sent=sent)
        return sent
