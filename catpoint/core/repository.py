from __future__ import annotations

from typing import Protocol, Set

from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor


class SecurityRepository(Protocol):
    """
    Protocol interface for security state storage.

    The security service reads and writes all of its state through this
    interface, so any object providing these methods can be injected
    (in-memory store, file-backed store, test fakes).

    Methods
    -------
    get_alarm_status() / set_alarm_status(status)
        Current alarm escalation level.
    get_arming_status() / set_arming_status(status)
        Current arming mode.
    get_sensors()
        Registered sensors.
    add_sensor(sensor) / remove_sensor(sensor)
        Register or unregister a sensor by identity.
    update_sensor(sensor)
        Persist a sensor's current ``active`` flag.
    """

    def get_alarm_status(self) -> AlarmStatus:
        ...

    def set_alarm_status(self, status: AlarmStatus) -> None:
        ...

    def get_arming_status(self) -> ArmingStatus:
        ...

    def set_arming_status(self, status: ArmingStatus) -> None:
        ...

    def get_sensors(self) -> Set[Sensor]:
        ...

    def add_sensor(self, sensor: Sensor) -> None:
        ...

    def remove_sensor(self, sensor: Sensor) -> None:
        ...

    def update_sensor(self, sensor: Sensor) -> None:
        ...
