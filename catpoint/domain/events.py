"""
Status event domain models.

A `StatusEvent` records *what changed* in the security system and *when*.
The core service never builds these itself; they are produced by listeners
that turn status callbacks into something that can be logged or transmitted
(e.g. webhook notifications).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from catpoint.domain.models import AlarmStatus, ArmingStatus


class StatusEventType(str, Enum):
    """
    Kind of status change.

    Members
    -------
    ALARM_STATUS_CHANGED : str
        The alarm status was written.
    ARMING_STATUS_CHANGED : str
        The arming status was written.
    SENSOR_STATUS_CHANGED : str
        One or more sensor flags were written.
    THREAT_DETECTED : str
        An image was classified (with or without a threat).
    """

    ALARM_STATUS_CHANGED = "ALARM_STATUS_CHANGED"
    ARMING_STATUS_CHANGED = "ARMING_STATUS_CHANGED"
    SENSOR_STATUS_CHANGED = "SENSOR_STATUS_CHANGED"
    THREAT_DETECTED = "THREAT_DETECTED"


@dataclass(frozen=True)
class StatusEvent:
    """
    Immutable record of one status change.

    Parameters
    ----------
    type
        Kind of change.
    timestamp
        When the change was observed.
    alarm_status
        New alarm status (ALARM_STATUS_CHANGED only).
    arming_status
        New arming status (ARMING_STATUS_CHANGED only).
    threat_detected
        Classification result (THREAT_DETECTED only).
    """

    type: StatusEventType
    timestamp: datetime
    alarm_status: Optional[AlarmStatus] = None
    arming_status: Optional[ArmingStatus] = None
    threat_detected: Optional[bool] = None
