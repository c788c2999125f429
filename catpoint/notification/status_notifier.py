from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence

from catpoint.core.repository import SecurityRepository
from catpoint.domain.events import StatusEvent, StatusEventType
from catpoint.domain.models import AlarmStatus, ArmingStatus
from catpoint.notification.base import Notifier, StatusNotification
from catpoint.notification.payload import build_snapshot

logger = logging.getLogger(__name__)


class NotifierStatusListener:
    """
    Status listener that bridges service callbacks -> notifiers.

    Responsibilities
    ----------------
    - Turn each status callback into a `StatusEvent`.
    - Attach a snapshot of the current repository state.
    - Deliver the resulting `StatusNotification` to every configured notifier.

    Notes
    -----
    Delivery is synchronous. A notifier that raises is logged and skipped so
    the remaining notifiers still receive the event.

    Parameters
    ----------
    repository
        Repository used to build the snapshot part of the payload.
    notifiers
        Notification senders (e.g. WebhookNotifier).
    source
        Source label attached to every notification.
    clock
        Time source for event timestamps.
    """

    def __init__(
        self,
        repository: SecurityRepository,
        notifiers: Sequence[Notifier],
        source: str = "security_service",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._repository = repository
        self._notifiers = list(notifiers)
        self._source = source
        self._clock = clock

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        self._emit(
            StatusEvent(type=StatusEventType.ALARM_STATUS_CHANGED, timestamp=self._clock(), alarm_status=status)
        )

    def on_arming_status_changed(self, status: ArmingStatus) -> None:
        self._emit(
            StatusEvent(type=StatusEventType.ARMING_STATUS_CHANGED, timestamp=self._clock(), arming_status=status)
        )

    def on_sensor_status_changed(self) -> None:
        self._emit(StatusEvent(type=StatusEventType.SENSOR_STATUS_CHANGED, timestamp=self._clock()))

    def on_threat_detected(self, detected: bool) -> None:
        self._emit(
            StatusEvent(type=StatusEventType.THREAT_DETECTED, timestamp=self._clock(), threat_detected=detected)
        )

    def _emit(self, ev: StatusEvent) -> None:
        notification = StatusNotification(event=ev, snapshot=build_snapshot(self._repository), source=self._source)
        for notifier in self._notifiers:
            try:
                notifier.notify(notification)
            except Exception:
                logger.exception("Notifier %r failed for %s", notifier, ev.type.value)
