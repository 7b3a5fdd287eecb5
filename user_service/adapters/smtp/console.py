"""
Console notifier adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging activation codes for local development.
"""

import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development purposes - prints activation codes to the log.
    """

    async def send(
        self, to_email: str, template_id: str, variables: Mapping[str, Any]
    ) -> None:
        """
        Log the notification instead of delivering it.

        The activation code is logged at INFO level so it is visible in
        container logs.

        Args:
            to_email: Recipient email address
            template_id: Template identifier
            variables: Template variables (activation_code, name)
        """
        logger.info(
            "[ACTIVATION] Email: %s Template: %s Code: %s",
            to_email,
            template_id,
            variables.get("activation_code"),
        )
