from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set, Tuple

from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType

SensorKey = Tuple[str, SensorType]


def sensor_key(sensor: Sensor) -> SensorKey:
    """Identity key of a sensor (name + type)."""
    return (sensor.name, sensor.sensor_type)


@dataclass
class InMemorySecurityRepository:
    """
    In-memory store for arming status, alarm status and sensors.

    This store maintains:
    - the current alarm status (default NO_ALARM)
    - the current arming status (default DISARMED)
    - the registered sensors keyed by (name, sensor_type)

    Notes
    -----
    - This store is intentionally simple and not thread-safe.
      Callers that share it between threads must synchronize externally.
    - ``get_sensors`` returns a new set holding the stored sensor objects,
      so callers may iterate it while the store changes.
    - ``update_sensor`` replaces the stored object with the given one
      (registering it if it was unknown).
    """

    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    arming_status: ArmingStatus = ArmingStatus.DISARMED
    sensors: Dict[SensorKey, Sensor] = field(default_factory=dict)

    def get_alarm_status(self) -> AlarmStatus:
        return self.alarm_status

    def set_alarm_status(self, status: AlarmStatus) -> None:
        self.alarm_status = status

    def get_arming_status(self) -> ArmingStatus:
        return self.arming_status

    def set_arming_status(self, status: ArmingStatus) -> None:
        self.arming_status = status

    def get_sensors(self) -> Set[Sensor]:
        return set(self.sensors.values())

    def add_sensor(self, sensor: Sensor) -> None:
        """
        Register a sensor.

        Parameters
        ----------
        sensor
            Sensor to add. Adding a sensor with an already registered
            identity overwrites the stored object.
        """
        self.sensors[sensor_key(sensor)] = sensor

    def remove_sensor(self, sensor: Sensor) -> None:
        """
        Unregister a sensor by identity. Unknown sensors are ignored.
        """
        self.sensors.pop(sensor_key(sensor), None)

    def update_sensor(self, sensor: Sensor) -> None:
        self.sensors[sensor_key(sensor)] = sensor
