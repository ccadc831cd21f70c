from __future__ import annotations
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Dict, List, Optional
import logging

import aiosmtplib

from .templates import EmailTemplateManager, RenderedEmail
from src.utils.config import EmailSection
from src.utils.sanitize import mask_email, strip_html

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    html: str
    template: str


class EmailNotifier:
    """
    Sends submission notifications to the admin and confirmations to the submitter.

    The notify_* coroutines run as FastAPI background tasks, after the response has
    gone out, so they log failures instead of raising them.
    """

    def __init__(self, settings: EmailSection, templates: EmailTemplateManager):
        self.settings = settings
        self.templates = templates
        self.outbox: List[OutgoingEmail] = []  # everything handed to send(), sent or not

    def _context(self, **variables) -> Dict[str, Any]:
        return {"company_name": self.settings.company_name, **variables}

    def _build_message(self, to: str, rendered: RenderedEmail) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.settings.sender
        msg["To"] = to
        msg["Subject"] = rendered.subject
        msg.set_content(strip_html(rendered.html) or rendered.subject, charset="utf-8")
        msg.add_alternative(rendered.html, subtype="html", charset="utf-8")
        return msg

    async def send(self, to: str, rendered: RenderedEmail) -> bool:
        self.outbox.append(OutgoingEmail(to=to, subject=rendered.subject, html=rendered.html, template=rendered.template))

        if not self.settings.enabled:
            logger.info(f"Email disabled, not sending '{rendered.template}' to {mask_email(to)}")
            return False

        msg = self._build_message(to, rendered)
        try:
            async with aiosmtplib.SMTP(
                hostname=self.settings.smtp_host,
                port=self.settings.smtp_port,
                start_tls=self.settings.use_tls,
                timeout=self.settings.timeout_s,
            ) as smtp:
                if self.settings.smtp_user:
                    await smtp.login(self.settings.smtp_user, self.settings.smtp_password or "")
                errors, response = await smtp.send_message(msg)
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{rendered.template}' to {mask_email(to)}: {e}")
            return False

        if errors:
            logger.error(f"SMTP server refused '{rendered.template}' for {mask_email(to)}: {errors}")
            return False

        logger.info(f"Sent '{rendered.template}' to {mask_email(to)} ({response})")
        return True

    async def _notify(self, event: str, submitter_email: Optional[str], **variables) -> None:
        context = self._context(**variables)
        try:
            admin_email = self.templates.render(f"{event}_notification", context)
            confirmation = self.templates.render(f"{event}_confirmation", context) if submitter_email else None
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Could not render {event} emails: {e}")
            return

        await self.send(self.settings.admin_email, admin_email)
        if confirmation is not None:
            await self.send(submitter_email, confirmation)

    async def notify_new_message(self, message) -> None:
        await self._notify("message", message.email, message=message)

    async def notify_quote_request(self, quote) -> None:
        await self._notify("quote", quote.email, quote=quote)

    async def notify_testimonial(self, testimonial, email: Optional[str] = None) -> None:
        await self._notify("testimonial", email, testimonial=testimonial)

    async def notify_application(self, application) -> None:
        await self._notify("application", application.email, application=application)
