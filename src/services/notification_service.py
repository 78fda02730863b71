"""Confirmation messages for new registrations (simulated delivery)."""
import logging
from typing import Callable, Optional

from src.models.participant import Participant
from src.utils.config import DEFAULT_SIGNATURE

logger = logging.getLogger(__name__)

SUBJECT = "Event Registration Confirmation"

CONFIRMATION_TEMPLATE = """Subject: {subject}

Dear {name},

Thank you for registering for "{event}"!

Your registration details:
- Name: {name}
- Email: {email}
- Contact: {contact}
- Event: {event}
- Registration Date: {registration_date}

We look forward to seeing you at the event!

Best regards,
{signature}"""


def build_confirmation_message(participant: Participant, signature: str = DEFAULT_SIGNATURE) -> str:
    """Render the confirmation email for a participant."""
    return CONFIRMATION_TEMPLATE.format(
        subject=SUBJECT,
        name=participant.name,
        event=participant.event,
        email=participant.email,
        contact=participant.contact,
        registration_date=participant.registration_date,
        signature=signature,
    )


def log_transport(message: str) -> None:
    """Default transport: write the message to the application log."""
    logger.info("Confirmation Email Sent:\n%s", message)


class NotificationSender:
    """
    Sends confirmation messages through a pluggable transport.

    The transport receives the fully rendered text. It is called once per
    notify; there is no retry and its failures never reach the caller.
    """

    def __init__(
        self,
        transport: Optional[Callable[[str], None]] = None,
        signature: str = DEFAULT_SIGNATURE
    ):
        self.transport = transport or log_transport
        self.signature = signature

    def notify(self, participant: Participant) -> str:
        """
        Render and dispatch the confirmation for one participant.

        Returns:
            The rendered message, whether or not the transport succeeded
        """
        message = build_confirmation_message(participant, self.signature)
        try:
            self.transport(message)
        except Exception:
            logger.exception("Failed to send confirmation to participant %d", participant.id)
        return message
