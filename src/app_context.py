"""Top-level wiring of store, registry, notifier and command handlers."""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from src.services.notification_service import NotificationSender
from src.services.participant_registry import ParticipantRegistry
from src.services.registration_commands import Downloader, RegistrationCommands
from src.services.storage_service import JsonFileStore
from src.utils.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Objects owned by one running application instance."""

    settings: Settings
    registry: ParticipantRegistry
    notifier: NotificationSender
    commands: RegistrationCommands


def create_app_context(
    settings: Settings,
    store=None,
    transport: Optional[Callable[[str], None]] = None,
    downloader: Optional[Downloader] = None
) -> AppContext:
    """
    Build an application context.

    Args:
        settings: Loaded configuration
        store: Key-value store (defaults to a JsonFileStore at settings.data_file)
        transport: Notification transport (defaults to logging)
        downloader: Export collaborator receiving (csv_text, filename)
    """
    if store is None:
        store = JsonFileStore(settings.data_file)

    registry = ParticipantRegistry(store)
    notifier = NotificationSender(transport=transport, signature=settings.signature)
    commands = RegistrationCommands(registry, notifier, downloader=downloader)

    logger.info("Application context ready with %d registrations", len(registry))
    return AppContext(
        settings=settings,
        registry=registry,
        notifier=notifier,
        commands=commands,
    )
