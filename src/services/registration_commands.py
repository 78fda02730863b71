"""User-triggered operations against the participant registry."""
import logging
from datetime import date
from typing import Callable, Optional, Tuple

from src.services.notification_service import NotificationSender
from src.services.participant_registry import ParticipantRegistry
from src.services.view_projector import (
    AdminView,
    build_admin_view,
    export_filename,
    filter_participants,
    to_csv,
)
from src.utils.exceptions import DuplicateError, StorageError, ValidationError
from src.utils.validation import validate_required_fields

logger = logging.getLogger(__name__)

Downloader = Callable[[str, str], None]


class RegistrationCommands:
    """
    Command handlers for the registration form and the admin view.

    Every handler is a single synchronous step that takes its context as
    parameters and reports back with a (success, message) tuple.
    """

    def __init__(
        self,
        registry: ParticipantRegistry,
        notifier: NotificationSender,
        downloader: Optional[Downloader] = None
    ):
        self.registry = registry
        self.notifier = notifier
        self.downloader = downloader

    def register(
        self,
        name: str,
        email: str,
        contact: str,
        event: str,
        notes: str = ""
    ) -> Tuple[bool, str]:
        """
        Register a participant from form input.

        Returns:
            Tuple of (success: bool, message: str)
            - (True, "Registration successful! ...") on success
            - (False, error_message) on missing fields, bad email,
              duplicate registration or storage failure

        Behavior:
            - Trims text inputs before validation
            - Sends the confirmation only after the record is persisted
        """
        fields = {
            "name": (name or "").strip(),
            "email": (email or "").strip(),
            "contact": (contact or "").strip(),
            "event": event or "",
            "notes": (notes or "").strip(),
        }

        is_valid, error_msg = validate_required_fields(fields)
        if not is_valid:
            return False, error_msg

        try:
            participant = self.registry.register(fields)
        except (ValidationError, DuplicateError) as e:
            logger.info(f"Registration rejected: {e}")
            return False, str(e)
        except StorageError as e:
            return False, f"Could not save registrations: {e}"

        self.notifier.notify(participant)
        return True, "Registration successful! A confirmation email has been sent."

    def delete(self, participant_id: int, confirmed: bool) -> Tuple[bool, str]:
        """
        Delete a registration after the user has confirmed.

        Returns:
            - (False, "Deletion cancelled.") if not confirmed
            - (True, "Registration deleted.") otherwise, including when
              the id no longer exists
        """
        if not confirmed:
            return False, "Deletion cancelled."

        try:
            self.registry.delete(participant_id)
        except StorageError as e:
            return False, f"Could not save registrations: {e}"

        return True, "Registration deleted."

    def resend(self, participant_id: int) -> Tuple[bool, str]:
        """
        Send the confirmation again.

        Returns:
            - (True, "Confirmation email sent to <email>") if found
            - (False, "") if the id is unknown
        """
        participant = self.registry.find(participant_id)
        if participant is None:
            return False, ""

        self.notifier.notify(participant)
        return True, f"Confirmation email sent to {participant.email}"

    def filter(self, search_term: str = "", event_name: str = "") -> AdminView:
        """Recompute the admin view for the current search box and event filter."""
        return build_admin_view(self.registry.all(), search_term, event_name)

    def export(
        self,
        search_term: str = "",
        event_name: str = "",
        today: Optional[date] = None
    ) -> Tuple[bool, str]:
        """
        Export the currently filtered registrations as CSV.

        Returns:
            - (False, "No data to export.") if the registry is empty
            - (False, "No registrations match the current filters.")
              if the filters hide every record
            - (True, filename) after handing CSV text to the downloader
        """
        if len(self.registry) == 0:
            return False, "No data to export."

        records = filter_participants(self.registry.all(), search_term, event_name)
        if not records:
            return False, "No registrations match the current filters."

        content = to_csv(records)
        filename = export_filename(today)
        if self.downloader is not None:
            self.downloader(content, filename)

        logger.info("Exported %d registrations to %s", len(records), filename)
        return True, filename
