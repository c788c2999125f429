"""
Notification contracts for outbound status reporting.

A `StatusNotification` pairs one `StatusEvent` with a snapshot of the
repository taken when the event was reported. Notifiers decide how (and
whether) to deliver it; the severity is derived from the event so every
notifier grades the same change the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Protocol

from catpoint.domain.events import StatusEvent, StatusEventType
from catpoint.domain.models import AlarmStatus


class Severity(str, Enum):
    """
    Urgency of a status notification.

    Members
    -------
    INFO : str
        Routine change (arming, sensor flags, clear image, NO_ALARM).
    WARNING : str
        Something needs attention (PENDING_ALARM, threat on camera).
    CRITICAL : str
        The alarm is sounding.
    """

    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.CRITICAL: 2}


def severity_of(ev: StatusEvent) -> Severity:
    """
    Grade a status event.

    Returns
    -------
    Severity
        CRITICAL for ALARM, WARNING for PENDING_ALARM or a detected threat,
        INFO otherwise.
    """
    if ev.type is StatusEventType.ALARM_STATUS_CHANGED:
        if ev.alarm_status is AlarmStatus.ALARM:
            return Severity.CRITICAL
        if ev.alarm_status is AlarmStatus.PENDING_ALARM:
            return Severity.WARNING
    if ev.type is StatusEventType.THREAT_DETECTED and ev.threat_detected:
        return Severity.WARNING
    return Severity.INFO


@dataclass(frozen=True)
class StatusNotification:
    """
    One status change ready for delivery.

    Parameters
    ----------
    event
        The change being reported.
    snapshot
        Repository state at report time (see ``payload.build_snapshot``).
    source
        Label of the component that produced the notification.
    """

    event: StatusEvent
    snapshot: Dict[str, Any] = field(default_factory=dict)
    source: str = "security_service"

    @property
    def severity(self) -> Severity:
        return severity_of(self.event)


class Notifier(Protocol):
    """
    Protocol interface for notification delivery.

    Implementations need only a ``notify(notification)`` method. They may
    raise on delivery failure; `NotifierStatusListener` logs and moves on.
    """

    def notify(self, notification: StatusNotification) -> None:
        ...
