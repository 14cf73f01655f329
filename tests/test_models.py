"""Tests for data models."""

import base64

import pytest
from pydantic import SecretStr, ValidationError

from smtp_mailer.exceptions import AuthError
from smtp_mailer.models import ClientConfig, Email, PlainAuth


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig(
            sender_address="sender@example.com",
            password=SecretStr("password123"),
            host="smtp.example.com",
            port=587,
        )

        assert config.verify_certificate is False
        assert config.timeout is None

    def test_password_masked_in_repr(self) -> None:
        config = ClientConfig(
            sender_address="sender@example.com",
            password=SecretStr("password123"),
            host="smtp.example.com",
            port=587,
        )

        assert "password123" not in repr(config)

    def test_frozen(self) -> None:
        config = ClientConfig(
            sender_address="sender@example.com",
            password=SecretStr("password123"),
            host="smtp.example.com",
            port=587,
        )

        with pytest.raises(ValidationError):
            config.host = "other.example.com"

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_range(self, port: int) -> None:
        with pytest.raises(ValidationError):
            ClientConfig(
                sender_address="sender@example.com",
                password=SecretStr("password123"),
                host="smtp.example.com",
                port=port,
            )


class TestPlainAuth:
    @pytest.fixture
    def config(self) -> ClientConfig:
        return ClientConfig(
            sender_address="sender@example.com",
            password=SecretStr("password123"),
            host="smtp.example.com",
            port=587,
        )

    def test_from_config(self, config: ClientConfig) -> None:
        auth = PlainAuth.from_config(config)

        assert auth.identity == ""
        assert auth.username == "sender@example.com"
        assert auth.host == "smtp.example.com"
        assert auth.response() == "\0sender@example.com\0password123"

    def test_encoded_response(self, config: ClientConfig) -> None:
        auth = PlainAuth.from_config(config)

        assert auth.encoded_response() == "AHNlbmRlckBleGFtcGxlLmNvbQBwYXNzd29yZDEyMw=="

    def test_encoded_response_is_utf8(self, config: ClientConfig) -> None:
        """Test non-ASCII passwords are encoded as UTF-8."""
        auth = PlainAuth.from_config(config.model_copy(update={"password": SecretStr("pässwörd")}))

        decoded = base64.b64decode(auth.encoded_response())
        assert decoded == "\0sender@example.com\0pässwörd".encode("utf-8")

    def test_empty_password(self, config: ClientConfig) -> None:
        """Test empty password raises AuthError."""
        with pytest.raises(AuthError) as exc_info:
            PlainAuth.from_config(config.model_copy(update={"password": SecretStr("")}))

        assert "password" in str(exc_info.value)

    def test_empty_host(self, config: ClientConfig) -> None:
        with pytest.raises(AuthError) as exc_info:
            PlainAuth.from_config(config.model_copy(update={"host": ""}))

        assert "host" in str(exc_info.value)


class TestEmail:
    def test_optional_fields_default_empty(self) -> None:
        email = Email(to=["a@x.com"])

        assert email.cc == ()
        assert email.bcc == ()
        assert email.subject == ""
        assert email.body == ""

    def test_to_required(self) -> None:
        with pytest.raises(ValidationError):
            Email()  # type: ignore[call-arg]

    def test_address_order_preserved(self) -> None:
        email = Email(to=["b@x.com", "a@x.com"], cc=["d@x.com", "c@x.com"])

        assert email.to == ("b@x.com", "a@x.com")
        assert email.cc == ("d@x.com", "c@x.com")

    def test_address_lists_immutable(self) -> None:
        """Test addresses cannot be changed after construction."""
        email = Email(to=["a@x.com"], cc=["c@x.com"])

        assert isinstance(email.to, tuple)
        with pytest.raises(AttributeError):
            email.to.append("b@x.com")  # type: ignore[attr-defined]
        with pytest.raises(ValidationError):
            email.cc = ("d@x.com",)  # type: ignore[misc]
