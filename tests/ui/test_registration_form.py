"""Tests for registration form helpers."""
from src.ui.registration_form import _field_keys, event_choice_label, event_choices


class TestEventChoices:
    """Tests for the event select box options."""

    def test_placeholder_first(self):
        """An empty placeholder forces an explicit choice."""
        choices = event_choices(("Conf", "Meetup"))
        assert choices == ["", "Conf", "Meetup"]
        assert event_choice_label("") == "-- Select an event --"
        assert event_choice_label("Conf") == "Conf"


class TestFieldKeys:
    """Tests for per-generation widget keys."""

    def test_new_form_id_gives_new_keys(self):
        """Bumping the form id yields fresh (empty) widgets."""
        first = _field_keys(0)
        second = _field_keys(1)

        assert set(first) == {"name", "email", "contact", "event", "notes"}
        assert all(first[name] != second[name] for name in first)
