"""
Domain models and enums.

This module defines the core domain-level types used across the system:
- Sensor types, alarm statuses and arming statuses
- Sensor, the binary intrusion detector tracked by the repository

Enums are string-valued so they serialize cleanly to JSON/YAML and can be
parsed back from their names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SensorType(str, Enum):
    """
    Kind of physical detector.

    Members
    -------
    DOOR : str
        Door contact sensor.
    WINDOW : str
        Window contact sensor.
    MOTION : str
        Motion (PIR) detector.
    """

    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


class AlarmStatus(str, Enum):
    """
    Current escalation level of the security system.

    Members
    -------
    NO_ALARM : str
        Nothing suspicious is going on.
    PENDING_ALARM : str
        A sensor tripped while armed; waiting for confirmation.
    ALARM : str
        Intrusion confirmed.
    """

    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"


class ArmingStatus(str, Enum):
    """
    Operating mode of the security system.

    Members
    -------
    ARMED_HOME : str
        Armed while occupants are at home.
    ARMED_AWAY : str
        Armed while the house is empty.
    DISARMED : str
        System is off; sensors never escalate.
    """

    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"
    DISARMED = "DISARMED"

    @property
    def is_armed(self) -> bool:
        return self is not ArmingStatus.DISARMED


@dataclass(unsafe_hash=True)
class Sensor:
    """
    Binary presence/intrusion detector.

    Identity is the pair (name, sensor_type); the ``active`` flag is excluded
    from equality and hashing so a sensor keeps its place in a set while its
    flag changes.

    Parameters
    ----------
    name
        Human-readable sensor name (e.g., "Front Door").
    sensor_type
        Kind of detector.
    active
        Whether the sensor currently reports activity.
    """

    name: str
    sensor_type: SensorType
    active: bool = field(default=False, compare=False)
