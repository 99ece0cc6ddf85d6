"""Email delivery of a saved summary file.

``SmtpMailSender`` reads ``EMAIL_USER`` / ``EMAIL_PASS`` from the environment
at send time, so credentials added to ``.env`` after startup are honoured.
``deliver`` is what the session calls: it never raises for mail failures.
"""

import logging
import os
import re
import smtplib
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Protocol

from summarist.models import AuthError, DeliveryError

logger = logging.getLogger(__name__)

SUBJECT = "Summarized Document"
BODY = "Please find the summarized document attached."

_ADDRESS_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class MailSender(Protocol):
    def send(self, file_path: Path, recipient: str) -> None: ...


class SmtpMailSender:
    """Send a file as an attachment over SMTP with implicit TLS."""

    def __init__(self, host: str = "smtp.gmail.com", port: int = 465, timeout_s: int = 30) -> None:
        self.host = host
        self.port = port
        self.timeout_s = timeout_s

    def send(self, file_path: Path, recipient: str) -> None:
        """Deliver ``file_path`` to ``recipient``.

        Raises:
            AuthError:     credentials missing or rejected by the server.
            DeliveryError: bad recipient, unreadable attachment, or any
                           connection/transport failure.
        """
        user = os.environ.get("EMAIL_USER")
        password = os.environ.get("EMAIL_PASS")
        if not user or not password:
            raise AuthError("EMAIL_USER and EMAIL_PASS must be set to send email.")
        if not is_valid_address(recipient):
            raise DeliveryError(f"Invalid recipient address: {recipient!r}")

        msg = build_message(user, recipient, file_path)
        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout_s) as server:
                server.login(user, password)
                server.send_message(msg)
        except smtplib.SMTPAuthenticationError as e:
            raise AuthError(f"Mail server rejected credentials for {user}: {e}") from e
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryError(f"Failed to send email to {recipient}: {e}") from e


def build_message(sender: str, recipient: str, file_path: Path) -> MIMEMultipart:
    """Compose the message with ``file_path`` attached.

    Raises:
        DeliveryError: if the attachment cannot be read.
    """
    msg = MIMEMultipart()
    msg["From"] = sender
    msg["To"] = recipient
    msg["Subject"] = SUBJECT
    msg.attach(MIMEText(BODY, "plain"))

    try:
        payload = file_path.read_bytes()
    except OSError as e:
        raise DeliveryError(f"Cannot read attachment {file_path}: {e}") from e

    part = MIMEBase("application", "octet-stream")
    part.set_payload(payload)
    encoders.encode_base64(part)
    part.add_header("Content-Disposition", f'attachment; filename="{file_path.name}"')
    msg.attach(part)
    return msg


def is_valid_address(address: str) -> bool:
    return bool(_ADDRESS_RE.match(address.strip()))


def deliver(sender: MailSender, file_path: Path, recipient: str) -> bool:
    """Send the file and report success; mail failures are logged, not raised."""
    recipient = recipient.strip()
    try:
        sender.send(file_path, recipient)
    except AuthError as e:
        logger.error("Email authentication failed: %s", e)
        return False
    except DeliveryError as e:
        logger.error("Email delivery failed: %s", e)
        return False
    logger.info("Sent %s to %s", file_path.name, recipient)
    return True
