from __future__ import annotations

import logging

from action_economy.events.bus import EVENT_NOTIFY, EventBus

logger = logging.getLogger(__name__)


def notify_info(event_bus: EventBus, message: str) -> None:
    logger.debug("info: %s", message)
    event_bus.emit(EVENT_NOTIFY, level="info", message=message)


def notify_warn(event_bus: EventBus, message: str) -> None:
    logger.debug("warn: %s", message)
    event_bus.emit(EVENT_NOTIFY, level="warn", message=message)
