"""A minimal SMTP client that sends plain-text email over STARTTLS."""

from smtp_mailer.base import MailClient
from smtp_mailer.client import SMTPClient
from smtp_mailer.config import Settings, get_settings_eager
from smtp_mailer.exceptions import (
    AuthError,
    AuthFailureError,
    ConfigError,
    ConnectError,
    DataPhaseError,
    EnvelopeError,
    MailDeliveryError,
    RecipientError,
    SendError,
    SMTPMailerError,
    TLSError,
)
from smtp_mailer.message import compose_message
from smtp_mailer.models import ClientConfig, Email, PlainAuth
from smtp_mailer.template import parse_body

__version__ = "0.1.0"

__all__ = [
    "AuthError",
    "AuthFailureError",
    "ClientConfig",
    "ConfigError",
    "ConnectError",
    "DataPhaseError",
    "Email",
    "EnvelopeError",
    "MailClient",
    "MailDeliveryError",
    "PlainAuth",
    "RecipientError",
    "SMTPClient",
    "SMTPMailerError",
    "SendError",
    "Settings",
    "TLSError",
    "compose_message",
    "get_settings_eager",
    "parse_body",
]
