"""Unit tests for notification_service."""
import logging
from unittest.mock import MagicMock

from src.services.notification_service import (
    NotificationSender,
    build_confirmation_message,
)


class TestBuildConfirmationMessage:
    """Tests for the confirmation template."""

    def test_message_contains_details(self, make_participant):
        """All registration details appear in the message."""
        message = build_confirmation_message(make_participant(contact="555-0199"))

        assert message.startswith("Subject: Event Registration Confirmation")
        assert "Dear Alice Smith," in message
        assert 'Thank you for registering for "Tech Conference 2024"!' in message
        assert "- Name: Alice Smith" in message
        assert "- Email: alice@example.com" in message
        assert "- Contact: 555-0199" in message
        assert "- Event: Tech Conference 2024" in message
        assert "- Registration Date: Jan 1, 2024, 10:00 AM" in message
        assert message.endswith("Best regards,\nEvent Management Team")

    def test_custom_signature(self, make_participant):
        """The sign-off can be configured."""
        message = build_confirmation_message(make_participant(), signature="The Crew")
        assert message.endswith("Best regards,\nThe Crew")


class TestNotificationSender:
    """Tests for NotificationSender.notify."""

    def test_transport_called_once_with_message(self, make_participant):
        """Each notify invokes the transport exactly once."""
        transport = MagicMock()
        sender = NotificationSender(transport=transport)
        participant = make_participant()

        message = sender.notify(participant)

        transport.assert_called_once_with(message)
        assert message == build_confirmation_message(participant)

    def test_transport_failure_does_not_propagate(self, make_participant, caplog):
        """A failing transport is logged, not raised, and not retried."""
        transport = MagicMock(side_effect=ConnectionError("smtp down"))
        sender = NotificationSender(transport=transport)

        with caplog.at_level(logging.ERROR):
            message = sender.notify(make_participant())

        assert "Dear Alice Smith" in message
        assert transport.call_count == 1
        assert "Failed to send confirmation" in caplog.text

    def test_default_transport_logs(self, make_participant, caplog):
        """Without a transport the message goes to the log."""
        sender = NotificationSender()

        with caplog.at_level(logging.INFO, logger="src.services.notification_service"):
            sender.notify(make_participant())

        assert "Confirmation Email Sent" in caplog.text
        assert "Dear Alice Smith" in caplog.text
