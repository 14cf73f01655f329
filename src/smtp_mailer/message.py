"""Wire format of outgoing messages."""

from smtp_mailer.models import Email

CRLF = "\r\n"


def compose_message(email: Email) -> str:
    """Build the header block and body sent during the data phase.

    Headers appear as Subject, To, Cc, Bcc. Cc and Bcc are only written when
    they hold at least one address. Note that Bcc recipients end up in a
    visible header.
    """
    lines = [
        f"Subject: {email.subject}",
        f"To: {','.join(email.to)}",
    ]
    if email.cc:
        lines.append(f"Cc: {','.join(email.cc)}")
    if email.bcc:
        lines.append(f"Bcc: {','.join(email.bcc)}")
    lines.append("")
    lines.append(email.body)

    return CRLF.join(lines) + CRLF
