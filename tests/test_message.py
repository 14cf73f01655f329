"""Tests for message composition."""

from smtp_mailer.message import compose_message
from smtp_mailer.models import Email


class TestComposeMessage:
    def test_minimal_message(self) -> None:
        """Test no Cc or Bcc header is written when both are empty."""
        email = Email(to=["a@x.com"], subject="S", body="B")

        assert compose_message(email) == "Subject: S\r\nTo: a@x.com\r\n\r\nB\r\n"

    def test_cc_follows_to(self) -> None:
        email = Email(to=["a@x.com"], cc=["c@x.com", "d@x.com"], subject="S", body="B")

        assert compose_message(email) == (
            "Subject: S\r\nTo: a@x.com\r\nCc: c@x.com,d@x.com\r\n\r\nB\r\n"
        )

    def test_bcc_is_a_visible_header(self) -> None:
        """Test Bcc addresses are written as a header after Cc."""
        email = Email(
            to=["a@x.com", "b@x.com"],
            cc=["c@x.com"],
            bcc=["e@x.com", "f@x.com"],
            subject="S",
            body="B",
        )

        assert compose_message(email) == (
            "Subject: S\r\n"
            "To: a@x.com,b@x.com\r\n"
            "Cc: c@x.com\r\n"
            "Bcc: e@x.com,f@x.com\r\n"
            "\r\n"
            "B\r\n"
        )

    def test_bcc_without_cc(self) -> None:
        email = Email(to=["a@x.com"], bcc=["e@x.com"], subject="S", body="B")

        assert compose_message(email) == "Subject: S\r\nTo: a@x.com\r\nBcc: e@x.com\r\n\r\nB\r\n"

    def test_multiline_body_kept_verbatim(self) -> None:
        email = Email(to=["a@x.com"], subject="S", body="line one\r\nline two")

        assert compose_message(email).endswith("\r\n\r\nline one\r\nline two\r\n")

    def test_empty_subject_and_body(self) -> None:
        email = Email(to=["a@x.com"])

        assert compose_message(email) == "Subject: \r\nTo: a@x.com\r\n\r\n\r\n"
