"""SMTP client for sending emails using smtplib."""

import logging
import re
import smtplib
import ssl
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import SecretStr, ValidationError

from smtp_mailer.base import MailClient
from smtp_mailer.exceptions import (
    AuthFailureError,
    ConfigError,
    ConnectError,
    DataPhaseError,
    EnvelopeError,
    RecipientError,
    SendError,
    TLSError,
)
from smtp_mailer.message import compose_message
from smtp_mailer.models import ClientConfig, Email, PlainAuth
from smtp_mailer.template import parse_body

if TYPE_CHECKING:
    from smtp_mailer.config import Settings

logger = logging.getLogger(__name__)

_RCPT_OK = (250, 251)
_LINE_ENDING_RE = re.compile(r"\r\n|\r|\n")


class SMTPClient(MailClient):
    """Mail client that opens a fresh STARTTLS connection for every email.

    Example:
        >>> client = SMTPClient("me@example.com", "secret", "smtp.example.com", 587)
        >>> client.send_mail(Email(to=["you@example.com"], subject="Hi", body="Hello"))
    """

    def __init__(
        self,
        sender_address: str,
        password: str,
        host: str,
        port: int,
        *,
        verify_certificate: bool = False,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client. No connection is made.

        Args:
            sender_address: Sender email address, also used as the login name.
            password: Password for the sender account.
            host: SMTP server hostname.
            port: SMTP server port.
            verify_certificate: Verify the server certificate during STARTTLS.
            timeout: Socket timeout in seconds, or None for the smtplib default.

        Raises:
            ConfigError: If the port or any other value is invalid.
            AuthError: If the credentials are empty.
        """
        try:
            self._config = ClientConfig(
                sender_address=sender_address,
                password=SecretStr(password),
                host=host,
                port=port,
                verify_certificate=verify_certificate,
                timeout=timeout,
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid SMTP client configuration: {e}") from e

        self._auth = PlainAuth.from_config(self._config)

        if not self._config.verify_certificate:
            logger.warning(
                "TLS certificate verification is disabled (host=%s)", self._config.host
            )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SMTPClient":
        """Create a client from loaded settings."""
        return cls(
            settings.sender_address,
            settings.password.get_secret_value(),
            settings.host,
            settings.port,
            verify_certificate=settings.verify_certificate,
            timeout=settings.timeout,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def sender_address(self) -> str:
        return self._config.sender_address

    @property
    def password(self) -> str:
        return self._config.password.get_secret_value()

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    def _context(self) -> dict[str, Any]:
        return {"sender": self.sender_address, "host": self.host, "port": self.port}

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self._config.verify_certificate:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def _dial(self) -> smtplib.SMTP:
        logger.debug("Connecting to SMTP server (host=%s, port=%s)", self.host, self.port)
        try:
            if self._config.timeout is None:
                return smtplib.SMTP(self.host, self.port)
            return smtplib.SMTP(self.host, self.port, timeout=self._config.timeout)
        except (smtplib.SMTPException, OSError) as e:
            raise ConnectError(str(e), **self._context()) from e

    def _handshake(self, connection: smtplib.SMTP) -> None:
        try:
            connection.starttls(context=self._ssl_context())
            connection.ehlo()
        except (smtplib.SMTPException, OSError) as e:
            raise TLSError(str(e), **self._context()) from e

        try:
            # smtplib.SMTP.auth only accepts ASCII responses; PLAIN is UTF-8
            code, reply = connection.docmd("AUTH", f"PLAIN {self._auth.encoded_response()}")
        except (smtplib.SMTPException, OSError) as e:
            raise AuthFailureError(str(e), **self._context()) from e
        if code != 235:
            raise AuthFailureError(_reply_text(code, reply), **self._context())

        try:
            code, reply = connection.mail(self.sender_address)
        except (smtplib.SMTPException, OSError) as e:
            raise EnvelopeError(str(e), **self._context()) from e
        if code != 250:
            raise EnvelopeError(_reply_text(code, reply), **self._context())

    def open_connection(self) -> smtplib.SMTP:
        """Connect, upgrade to TLS, authenticate and declare the sender.

        The caller owns the returned connection and must close it.

        Raises:
            ConnectError: If the server cannot be reached.
            TLSError: If STARTTLS fails.
            AuthFailureError: If the credentials are rejected.
            EnvelopeError: If the sender address is rejected.
        """
        connection = self._dial()
        try:
            self._handshake(connection)
        except Exception:
            connection.close()
            raise

        logger.info("SMTP connection established (host=%s)", self.host)
        return connection

    def send_mail(self, email: Email) -> None:
        """Send an email over a new connection.

        Only the To addresses are declared as envelope recipients.

        Args:
            email: The email to send.

        Raises:
            ConnectError: If the server cannot be reached.
            TLSError: If STARTTLS fails.
            AuthFailureError: If the credentials are rejected.
            EnvelopeError: If the sender address is rejected.
            RecipientError: On the first rejected recipient.
            DataPhaseError: If the server answers the DATA command with
                anything but 354.
            SendError: If writing the message fails. A transport error while
                the DATA command itself is sent also surfaces here, since
                smtplib sends the command and the payload in one call.
        """
        connection = self.open_connection()
        try:
            self._declare_recipients(connection, email.to)
            self._write_message(connection, compose_message(email))
        finally:
            connection.close()

        logger.info("Email sent (recipients=%d, subject=%r)", len(email.to), email.subject)

    def _declare_recipients(self, connection: smtplib.SMTP, recipients: Sequence[str]) -> None:
        for address in recipients:
            try:
                code, reply = connection.rcpt(address)
            except (smtplib.SMTPException, OSError) as e:
                raise RecipientError(str(e), recipient=address, **self._context()) from e
            if code not in _RCPT_OK:
                raise RecipientError(
                    _reply_text(code, reply), recipient=address, **self._context()
                )

    def _write_message(self, connection: smtplib.SMTP, message: str) -> None:
        # smtplib leaves bytes payloads untouched, so bare CR or LF must become CRLF here
        payload = _LINE_ENDING_RE.sub("\r\n", message).encode("utf-8")
        try:
            code, reply = connection.data(payload)
        except smtplib.SMTPDataError as e:
            # smtplib only raises this when DATA itself is not answered with 354
            raise DataPhaseError(str(e), **self._context()) from e
        except (smtplib.SMTPException, OSError) as e:
            raise SendError(str(e), **self._context()) from e

        if code != 250:
            logger.warning(
                "Failed to close email writer (host=%s, reply=%s)",
                self.host,
                _reply_text(code, reply),
            )

    def parse_body(self, body: str, parameters: Mapping[str, Any]) -> str:
        """Replace ``{{key}}`` placeholders in a body with parameter values."""
        return parse_body(body, parameters)


def _reply_text(code: int, reply: bytes | str) -> str:
    if isinstance(reply, bytes):
        reply = reply.decode("utf-8", errors="replace")
    return f"{code} {reply}"
