"""
SMTP notifier adapter - Implements Notifier protocol over smtplib.

Messages are plain text. The body lists the template variables under a
subject chosen by template id; no template engine is involved.
"""

import asyncio
import logging
import smtplib
from collections.abc import Mapping
from email.message import EmailMessage
from typing import Any

from user_service.domain.exceptions import DeliveryError
from user_service.domain.ports import NotificationTemplate

logger = logging.getLogger(__name__)

SUBJECTS = {
    NotificationTemplate.ACTIVATION.value: "Activate your account!",
}


class SmtpNotifier:
    """
    Delivers notifications through an SMTP relay.

    The blocking smtplib exchange runs in a worker thread so the event
    loop is not held up while the relay responds.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    async def send(
        self, to_email: str, template_id: str, variables: Mapping[str, Any]
    ) -> None:
        """
        Build and send the message.

        Raises:
            DeliveryError: If the relay is unreachable or rejects the message
        """
        message = self.build_message(to_email, template_id, variables)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("delivery of %s to %s failed: %s", template_id, to_email, exc)
            raise DeliveryError(f"Could not deliver {template_id} email") from exc
        logger.info("delivered %s to %s", template_id, to_email)

    def build_message(
        self, to_email: str, template_id: str, variables: Mapping[str, Any]
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to_email
        message["Subject"] = SUBJECTS.get(template_id, template_id)
        name = variables.get("name")
        lines = [f"Hello {name}," if name else "Hello,", ""]
        if "activation_code" in variables:
            lines.append(f"Your activation code is {variables['activation_code']}.")
        else:
            lines.extend(f"{key}: {value}" for key, value in variables.items())
        message.set_content("\n".join(lines) + "\n")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as conn:
            if self._use_tls:
                conn.starttls()
            if self._username:
                conn.login(self._username, self._password or "")
            conn.send_message(message)
