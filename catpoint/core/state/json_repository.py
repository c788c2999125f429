from __future__ import annotations

import json
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Union

from catpoint.core.state.memory_repository import InMemorySecurityRepository
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType


def _encode_sensor(sensor: Sensor) -> Dict[str, Any]:
    return {
        "name": sensor.name,
        "sensor_type": sensor.sensor_type.value,
        "active": sensor.active,
    }


def _decode_sensor(obj: Dict[str, Any]) -> Sensor:
    """
    Decode one stored sensor dictionary.

    Raises
    ------
    KeyError
        If ``name`` or ``sensor_type`` is missing.
    ValueError
        If ``sensor_type`` is not a known SensorType.
    """
    return Sensor(
        name=str(obj["name"]),
        sensor_type=SensorType(obj["sensor_type"]),
        active=bool(obj.get("active", False)),
    )


class JsonFileSecurityRepository(InMemorySecurityRepository):
    """
    File-backed repository persisting state as a single JSON document.

    The file is read once on construction (a missing file means default
    state) and rewritten after every write operation. Writes go to a
    temporary sibling file first and then replace the target, so a crash
    mid-write leaves the previous document intact.

    Document layout::

        {
          "alarm_status": "NO_ALARM",
          "arming_status": "DISARMED",
          "sensors": [{"name": "Front Door", "sensor_type": "DOOR", "active": false}]
        }

    Parameters
    ----------
    path
        Location of the JSON document.

    Raises
    ------
    ValueError
        If the existing file is not valid JSON, its root is not a mapping,
        or it contains unknown status/sensor type values.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self._path = Path(path).expanduser()
        if self._path.exists():
            self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        with self._path.open("r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Corrupt repository file {self._path}: {e}") from e

        if not isinstance(raw, dict):
            raise ValueError(f"Repository file {self._path} must contain a JSON object")

        self.alarm_status = AlarmStatus(raw.get("alarm_status", AlarmStatus.NO_ALARM.value))
        self.arming_status = ArmingStatus(raw.get("arming_status", ArmingStatus.DISARMED.value))

        items = raw.get("sensors", [])
        if not isinstance(items, list):
            raise ValueError(f"Corrupt repository file {self._path}: 'sensors' must be a list")
        for i, item in enumerate(items):
            try:
                sensor = _decode_sensor(item)
            except (KeyError, TypeError) as e:
                raise ValueError(f"Corrupt repository file {self._path}: sensors[{i}] is malformed") from e
            super().add_sensor(sensor)

    def _save(self) -> None:
        doc = {
            "alarm_status": self.alarm_status.value,
            "arming_status": self.arming_status.value,
            "sensors": [
                _encode_sensor(s)
                for s in sorted(self.sensors.values(), key=lambda s: (s.name, s.sensor_type.value))
            ],
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(doc, f, indent=2)
        os.replace(tmp, self._path)

    @contextmanager
    def _persisting(self) -> Iterator[None]:
        """
        Apply an in-memory change and save it, undoing the change if saving fails.

        Stored sensor flags are restored too, so reads keep matching the file.
        """
        alarm, arming = self.alarm_status, self.arming_status
        sensors = dict(self.sensors)
        flags = {key: s.active for key, s in sensors.items()}
        yield
        try:
            self._save()
        except Exception:
            self.alarm_status, self.arming_status = alarm, arming
            self.sensors = sensors
            for key, s in sensors.items():
                s.active = flags[key]
            raise

    def set_alarm_status(self, status: AlarmStatus) -> None:
        with self._persisting():
            super().set_alarm_status(status)

    def set_arming_status(self, status: ArmingStatus) -> None:
        with self._persisting():
            super().set_arming_status(status)

    def add_sensor(self, sensor: Sensor) -> None:
        with self._persisting():
            super().add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._persisting():
            super().remove_sensor(sensor)

    def update_sensor(self, sensor: Sensor) -> None:
        with self._persisting():
            super().update_sensor(sensor)
