"""Unit tests for the contact email service."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from portfolio_site.exceptions import ConfigurationException, EmailDeliveryException
from portfolio_site.models import ContactMessage
from portfolio_site.services import contact_service


@pytest.fixture
def contact_message():
    return ContactMessage(name="Ada Lovelace", email="ada@example.com", message="Hello <there>!")


def test_build_email_headers(contact_message):
    email = contact_service.build_email(contact_message, sender="site@example.com", recipient="owner@example.com")

    assert email["Subject"] == "New contact form message: Ada Lovelace"
    assert email["From"] == "site@example.com"
    assert email["To"] == "owner@example.com"
    assert email["Reply-To"] == "ada@example.com"


def test_build_email_escapes_html_part(contact_message):
    email = contact_service.build_email(contact_message, sender="site@example.com", recipient="owner@example.com")

    plain = email.get_body(preferencelist=("plain",)).get_content()
    html_part = email.get_body(preferencelist=("html",)).get_content()

    assert "Hello <there>!" in plain
    assert "Hello &lt;there&gt;!" in html_part


@pytest.mark.asyncio
async def test_send_contact_email_delivers(contact_message, mock_settings):
    with patch("portfolio_site.services.contact_service.smtplib.SMTP") as mock_smtp_cls:
        smtp = mock_smtp_cls.return_value.__enter__.return_value

        await contact_service.send_contact_email(contact_message, mock_settings)

    mock_smtp_cls.assert_called_once_with(mock_settings.smtp_host, mock_settings.smtp_port, timeout=15.0)
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("site@example.com", "app-password")
    smtp.send_message.assert_called_once()
    sent = smtp.send_message.call_args[0][0]
    assert sent["To"] == "owner@example.com"


@pytest.mark.asyncio
async def test_send_contact_email_without_tls(contact_message, mock_settings):
    settings = mock_settings.model_copy(update={"smtp_use_tls": False})

    with patch("portfolio_site.services.contact_service.smtplib.SMTP") as mock_smtp_cls:
        smtp = mock_smtp_cls.return_value.__enter__.return_value
        await contact_service.send_contact_email(contact_message, settings)

    smtp.starttls.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["smtp_username", "smtp_password", "contact_recipient"])
async def test_send_contact_email_not_configured(contact_message, mock_settings, missing):
    settings = mock_settings.model_copy(update={missing: ""})

    with patch("portfolio_site.services.contact_service._deliver") as mock_deliver:
        with pytest.raises(ConfigurationException) as exc_info:
            await contact_service.send_contact_email(contact_message, settings)

    assert exc_info.value.details["missing"] == [missing]
    mock_deliver.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        smtplib.SMTPAuthenticationError(535, b"Bad credentials"),
        ConnectionRefusedError("refused"),
    ],
)
async def test_send_contact_email_delivery_failure(contact_message, mock_settings, error):
    with patch("portfolio_site.services.contact_service._deliver", MagicMock(side_effect=error)):
        with pytest.raises(EmailDeliveryException) as exc_info:
            await contact_service.send_contact_email(contact_message, mock_settings)

    assert exc_info.value.message == "Email could not be sent"
    assert exc_info.value.status_code == 500
