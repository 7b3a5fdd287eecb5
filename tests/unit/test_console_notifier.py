"""
Unit tests for ConsoleNotifier adapter.

Tests verify the console notifier implements the Notifier protocol
and logs activation codes in the expected format.
"""

import logging

import pytest

from user_service.adapters.smtp.console import ConsoleNotifier


class TestConsoleNotifier:
    """Tests for ConsoleNotifier.send."""

    @pytest.mark.asyncio
    async def test_send_logs_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        notifier = ConsoleNotifier()

        with caplog.at_level(logging.INFO):
            await notifier.send("ann@x.com", "activation-mail", {"activation_code": "1234"})

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO

    @pytest.mark.asyncio
    async def test_send_format(self, caplog: pytest.LogCaptureFixture) -> None:
        """Log format: [ACTIVATION] Email: ... Template: ... Code: ..."""
        notifier = ConsoleNotifier()

        with caplog.at_level(logging.INFO):
            await notifier.send(
                "ann@x.com", "activation-mail", {"name": "Ann", "activation_code": "5678"}
            )

        assert "[ACTIVATION]" in caplog.text
        assert "Email: ann@x.com" in caplog.text
        assert "Template: activation-mail" in caplog.text
        assert "Code: 5678" in caplog.text

    @pytest.mark.asyncio
    async def test_send_returns_none(self) -> None:
        result = await ConsoleNotifier().send("ann@x.com", "activation-mail", {})

        assert result is None

    def test_no_explicit_inheritance(self) -> None:
        """ConsoleNotifier uses structural subtyping, not inheritance."""
        assert ConsoleNotifier.__bases__ == (object,)
