"""Data models for smtp-mailer."""

import base64

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from smtp_mailer.exceptions import AuthError


class ClientConfig(BaseModel):
    """SMTP server location and sender credentials."""

    model_config = ConfigDict(frozen=True)

    sender_address: str
    password: SecretStr
    host: str
    port: int = Field(ge=1, le=65535)
    # False keeps the historical behaviour of trusting any server certificate
    verify_certificate: bool = False
    timeout: float | None = None


class PlainAuth(BaseModel):
    """Credential token for the SMTP PLAIN mechanism (RFC 4616).

    The identity is always empty, so the server derives it from the username.
    """

    model_config = ConfigDict(frozen=True)

    identity: str = ""
    username: str
    password: SecretStr
    host: str

    @classmethod
    def from_config(cls, config: ClientConfig) -> "PlainAuth":
        """Build the token for a client configuration.

        Raises:
            AuthError: If the username, password or host is empty.
        """
        missing = [
            name
            for name, value in (
                ("sender address", config.sender_address),
                ("password", config.password.get_secret_value()),
                ("host", config.host),
            )
            if not value
        ]
        if missing:
            raise AuthError(f"Cannot build PLAIN credentials, empty {', '.join(missing)}")

        return cls(username=config.sender_address, password=config.password, host=config.host)

    def response(self) -> str:
        """Return the PLAIN client response (before base64 encoding)."""
        return f"{self.identity}\0{self.username}\0{self.password.get_secret_value()}"

    def encoded_response(self) -> str:
        """Return the response as sent after ``AUTH PLAIN``: base64 of its UTF-8 bytes."""
        return base64.b64encode(self.response().encode("utf-8")).decode("ascii")


class Email(BaseModel):
    """An outgoing plain-text email."""

    model_config = ConfigDict(frozen=True)

    to: tuple[str, ...]
    cc: tuple[str, ...] = ()
    bcc: tuple[str, ...] = ()
    subject: str = ""
    body: str = ""
