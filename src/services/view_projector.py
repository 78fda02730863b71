"""Read-only views derived from the participant registry."""
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from src.models.participant import Participant
from src.utils.date_utils import iso_date

CSV_HEADERS = ["ID", "Name", "Email", "Contact", "Event", "Registration Date", "Notes"]


@dataclass(frozen=True)
class RegistrationStats:
    """Aggregate counts shown above the participant table."""

    total_registrations: int
    unique_events: int


@dataclass
class AdminView:
    """Everything the admin screen shows for one search/filter state."""

    rows: List[Participant]
    stats: RegistrationStats
    event_options: List[str]
    search_term: str = ""
    event_name: str = ""
    total: int = 0
    no_results: bool = False
    filters_active: bool = field(init=False)

    def __post_init__(self):
        self.filters_active = bool(self.search_term or self.event_name)


def sorted_by_newest(participants: Iterable[Participant]) -> List[Participant]:
    """Stable sort, most recent timestamp first."""
    return sorted(participants, key=lambda p: p.timestamp, reverse=True)


def unique_events(participants: Iterable[Participant]) -> List[str]:
    """Distinct event names in alphabetical order."""
    return sorted({p.event for p in participants})


def stats(participants: Iterable[Participant]) -> RegistrationStats:
    """Count registrations and distinct events."""
    records = list(participants)
    return RegistrationStats(
        total_registrations=len(records),
        unique_events=len({p.event for p in records}),
    )


def matches(participant: Participant, search_term: str = "", event_name: str = "") -> bool:
    """
    Check one participant against the admin search box and event filter.

    The search term matches name, email or event case-insensitively;
    the event filter must match exactly. An empty value disables it.
    """
    if search_term:
        needle = search_term.lower()
        if not (
            needle in participant.name.lower()
            or needle in participant.email.lower()
            or needle in participant.event.lower()
        ):
            return False

    if event_name and participant.event != event_name:
        return False

    return True


def filter_participants(
    participants: Iterable[Participant],
    search_term: str = "",
    event_name: str = ""
) -> List[Participant]:
    """Subset matching both filters, in input order."""
    return [p for p in participants if matches(p, search_term, event_name)]


def _quoted(value: str) -> str:
    return f'"{value}"'


def to_csv(records: Iterable[Participant]) -> str:
    """
    Render participants as CSV text.

    Name, Event, Registration Date and Notes are wrapped in double
    quotes; ID, Email and Contact are written bare. Rows are joined by
    '\\n' with no trailing newline.
    """
    rows = [",".join(CSV_HEADERS)]
    for p in records:
        rows.append(",".join([
            str(p.id),
            _quoted(p.name),
            p.email,
            p.contact,
            _quoted(p.event),
            _quoted(p.registration_date),
            _quoted(p.notes or ""),
        ]))
    return "\n".join(rows)


def export_filename(today: Optional[date] = None) -> str:
    """Suggested download name, e.g. event_registrations_2024-01-01.csv."""
    return f"event_registrations_{iso_date(today)}.csv"


def build_admin_view(
    participants: Iterable[Participant],
    search_term: str = "",
    event_name: str = ""
) -> AdminView:
    """
    Recompute listing, stats and filter options in one pass.

    Args:
        participants: Current registry contents
        search_term: Admin search box value
        event_name: Selected event filter ("" for all events)

    Returns:
        AdminView with newest-first visible rows; no_results is set
        when records exist but none pass the filters
    """
    records = list(participants)
    visible = sorted_by_newest(filter_participants(records, search_term, event_name))

    return AdminView(
        rows=visible,
        stats=stats(records),
        event_options=unique_events(records),
        search_term=search_term,
        event_name=event_name,
        total=len(records),
        no_results=bool(records) and not visible,
    )
