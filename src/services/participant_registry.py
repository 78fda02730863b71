"""Participant registry: the in-memory source of truth, written through to the store."""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from src.models.participant import Participant
from src.services.storage_service import COUNTER_KEY, PARTICIPANTS_KEY
from src.utils.date_utils import format_registration_date, now_local, to_iso_timestamp
from src.utils.exceptions import DuplicateError, ValidationError
from src.utils.validation import normalize_email, validate_email

logger = logging.getLogger(__name__)


class ParticipantRegistry:
    """
    Registrations for one application context.

    Loaded from the store on construction. Every mutation runs inside a
    store transaction: the latest stored state is reloaded first, so
    registries in other sessions sharing the same store are never
    overwritten, then the full participant list and the id counter are
    written back before returning.
    """

    def __init__(self, store, clock: Optional[Callable[[], datetime]] = None):
        self._store = store
        self._clock = clock or now_local
        self._participants: List[Participant] = []
        self._next_id = 1
        with self._store.transaction():
            self._load()

        logger.info(
            "Loaded %d participants (next id %d)", len(self._participants), self._next_id
        )

    def _load(self) -> None:
        records = self._store.get(PARTICIPANTS_KEY, []) or []
        self._participants = [Participant.from_dict(record) for record in records]

        counter = self._store.get(COUNTER_KEY, 1)
        if isinstance(counter, bool) or not isinstance(counter, int) or counter < 1:
            counter = 1

        # Never hand out an id that is already taken
        highest = max((p.id for p in self._participants), default=0)
        self._next_id = max(counter, highest + 1)

    def _persist(self) -> None:
        self._store.set_many({
            PARTICIPANTS_KEY: [p.to_dict() for p in self._participants],
            COUNTER_KEY: self._next_id,
        })

    def refresh(self) -> None:
        """Pick up changes other sessions have written to the store."""
        with self._store.transaction():
            self._load()

    @property
    def next_id(self) -> int:
        """Id the next successful registration will receive."""
        return self._next_id

    def __len__(self) -> int:
        return len(self._participants)

    def is_duplicate(self, email: str, event: str) -> bool:
        """Check whether email (case-insensitive) is already registered for event."""
        normalized = normalize_email(email)
        return any(
            normalize_email(p.email) == normalized and p.event == event
            for p in self._participants
        )

    def register(self, fields: Dict[str, Any], now: Optional[datetime] = None) -> Participant:
        """
        Create, store and persist a participant.

        Args:
            fields: name, email, contact, event and optional notes
            now: Registration time (defaults to the registry clock)

        Returns:
            The created Participant

        Raises:
            ValidationError: If the email is malformed
            DuplicateError: If the email is already registered for the event
            StorageError: If persisting fails; nothing is changed in memory
        """
        email = fields.get("email", "")
        event = fields.get("event", "")

        is_valid, error_msg = validate_email(email)
        if not is_valid:
            raise ValidationError(error_msg)

        with self._store.transaction():
            # Reload to get the latest state before checking and assigning the id
            self._load()

            if self.is_duplicate(email, event):
                raise DuplicateError("You are already registered for this event.")

            moment = now or self._clock()
            participant = Participant(
                id=self._next_id,
                name=fields.get("name", ""),
                email=email,
                contact=fields.get("contact", ""),
                event=event,
                notes=fields.get("notes") or "",
                registration_date=format_registration_date(moment),
                timestamp=to_iso_timestamp(moment),
            )

            self._participants.append(participant)
            self._next_id += 1
            try:
                self._persist()
            except Exception:
                self._participants.pop()
                self._next_id -= 1
                raise

        logger.info("Registered participant %d for %s", participant.id, participant.event)
        return participant

    def delete(self, participant_id: int) -> bool:
        """
        Remove the participant with the given id.

        Returns:
            True if a record was removed, False if no such id exists

        Raises:
            StorageError: If persisting fails; the record is kept
        """
        with self._store.transaction():
            self._load()

            remaining = [p for p in self._participants if p.id != participant_id]
            if len(remaining) == len(self._participants):
                return False

            previous = self._participants
            self._participants = remaining
            try:
                self._persist()
            except Exception:
                self._participants = previous
                raise

        logger.info("Deleted participant %d", participant_id)
        return True

    def find(self, participant_id: int) -> Optional[Participant]:
        """Return the participant with that id, or None if not found."""
        for participant in self._participants:
            if participant.id == participant_id:
                return participant
        return None

    def all(self) -> Iterator[Participant]:
        """
        Iterate over current participants in storage order.

        Each call starts a new pass over a snapshot, so mutations during
        iteration do not affect it. Sort before display.
        """
        snapshot = tuple(self._participants)
        return (participant for participant in snapshot)
