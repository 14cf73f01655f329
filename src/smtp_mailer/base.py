"""Abstract base class for mail clients."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from smtp_mailer.models import Email


class MailClient(ABC):
    """Interface every mail client implements.

    A client is configured once and may send any number of emails.
    """

    @property
    @abstractmethod
    def sender_address(self) -> str:
        """Address used as envelope sender and for authentication."""
        ...

    @property
    @abstractmethod
    def password(self) -> str:
        """Password used for authentication."""
        ...

    @property
    @abstractmethod
    def host(self) -> str:
        """Mail server hostname."""
        ...

    @property
    @abstractmethod
    def port(self) -> int:
        """Mail server port."""
        ...

    @abstractmethod
    def parse_body(self, body: str, parameters: Mapping[str, Any]) -> str:
        """Replace ``{{key}}`` placeholders in a body with parameter values."""
        ...

    @abstractmethod
    def send_mail(self, email: Email) -> None:
        """Send an email.

        Args:
            email: The email to send.

        Raises:
            MailDeliveryError: If any step of the delivery fails.
        """
        ...
