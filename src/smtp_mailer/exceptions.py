"""Custom exceptions for smtp-mailer."""


class SMTPMailerError(Exception):
    """Base exception for smtp-mailer."""


class ConfigError(SMTPMailerError):
    """Raised when there is a configuration error."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.file_path = file_path
        self.line = line
        self.col = col
        full_message = message
        if file_path:
            location = f" in {file_path}"
            if line is not None:
                location += f" at line {line}"
                if col is not None:
                    location += f", column {col}"
            full_message = f"Configuration error{location}: {message}"
        super().__init__(full_message)


class AuthError(SMTPMailerError):
    """Raised when a credential token cannot be built from the given material."""


class MailDeliveryError(SMTPMailerError):
    """Base exception for failures while talking to the SMTP server.

    Carries the sender, host and port of the client plus the text of the
    underlying transport error.
    """

    action = "deliver mail"

    def __init__(self, detail: str, *, sender: str, host: str, port: int) -> None:
        self.detail = detail
        self.sender = sender
        self.host = host
        self.port = port
        super().__init__(f"Failed to {self.action} from {sender} [{host}:{port}]: {detail}")


class ConnectError(MailDeliveryError):
    """Raised when the SMTP server cannot be reached."""

    action = "connect"


class TLSError(MailDeliveryError):
    """Raised when the STARTTLS upgrade fails."""

    action = "start TLS"


class AuthFailureError(MailDeliveryError):
    """Raised when the server rejects the credentials."""

    action = "authenticate"


class EnvelopeError(MailDeliveryError):
    """Raised when the server rejects the envelope sender."""

    action = "declare sender"


class RecipientError(MailDeliveryError):
    """Raised when the server rejects a recipient."""

    action = "add recipient"

    def __init__(
        self, detail: str, *, recipient: str, sender: str, host: str, port: int
    ) -> None:
        self.recipient = recipient
        super().__init__(f"{recipient}: {detail}", sender=sender, host=host, port=port)


class DataPhaseError(MailDeliveryError):
    """Raised when the server refuses to enter the data phase."""

    action = "start data phase"


class SendError(MailDeliveryError):
    """Raised when writing the message to the server fails."""

    action = "send email"
