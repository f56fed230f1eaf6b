"""Contact form email delivery over SMTP."""

import asyncio
import html
import smtplib
from email.message import EmailMessage

from portfolio_site.config import Settings, get_settings
from portfolio_site.exceptions import ConfigurationException, EmailDeliveryException, ErrorCode
from portfolio_site.logging_config import get_logger, log_with_context
from portfolio_site.models.contact import ContactMessage

logger = get_logger(__name__)

SMTP_TIMEOUT_SECONDS = 15.0


def build_email(message: ContactMessage, sender: str, recipient: str) -> EmailMessage:
    """Build the notification email with a plain-text body and an HTML alternative."""
    email = EmailMessage()
    email["Subject"] = f"New contact form message: {message.name}"
    email["From"] = sender
    email["To"] = recipient
    email["Reply-To"] = message.email
    email.set_content(f"Name: {message.name}\nEmail: {message.email}\nMessage: {message.message}")
    email.add_alternative(
        f"<p><strong>Name:</strong> {html.escape(message.name)}</p>\n"
        f"<p><strong>Email:</strong> {html.escape(message.email)}</p>\n"
        f"<p><strong>Message:</strong> {html.escape(message.message)}</p>",
        subtype="html",
    )
    return email


def _deliver(email: EmailMessage, settings: Settings) -> None:
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS) as smtp:
        if settings.smtp_use_tls:
            smtp.starttls()
        smtp.login(settings.smtp_username, settings.smtp_password)
        smtp.send_message(email)


async def send_contact_email(message: ContactMessage, settings: Settings | None = None) -> None:
    """
    Send a contact form submission to the site owner.

    Args:
        message: Validated contact form body.
        settings: Settings instance (defaults to singleton)

    Raises:
        ConfigurationException: If SMTP login or the recipient is not configured.
        EmailDeliveryException: If the SMTP conversation fails.
    """
    if settings is None:
        settings = get_settings()

    missing = [
        name
        for name in ("smtp_username", "smtp_password", "contact_recipient")
        if not getattr(settings, name)
    ]
    if missing:
        raise ConfigurationException(
            "Email delivery is not configured",
            code=ErrorCode.CONFIG_MISSING,
            details={"missing": missing},
        )

    email = build_email(message, sender=settings.smtp_username, recipient=settings.contact_recipient)

    try:
        # smtplib blocks, keep it off the event loop
        await asyncio.to_thread(_deliver, email, settings)
    except (smtplib.SMTPException, OSError) as e:
        log_with_context(
            logger,
            "error",
            "Contact email delivery failed",
            error=str(e),
            error_type=type(e).__name__,
            smtp_host=settings.smtp_host,
            event_type="contact_email_failed",
        )
        raise EmailDeliveryException(details={"error_type": type(e).__name__}) from e

    log_with_context(
        logger,
        "info",
        "Contact email sent",
        smtp_host=settings.smtp_host,
        event_type="contact_email_sent",
    )
