"""
Unit tests for catpoint.domain.models.

These tests verify:
- Enum stability (required members exist and preserve expected values)
- Sensor identity (name + type) is independent of the active flag
- ArmingStatus.is_armed

The goal is to validate domain contracts used by the service and repositories.
"""

from __future__ import annotations

from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType


def test_alarm_status_enum_values() -> None:
    """
    Ensure AlarmStatus members and values are stable.

    These values are persisted by the JSON repository and must not change
    silently without intent.
    """
    assert AlarmStatus.NO_ALARM.value == "NO_ALARM"
    assert AlarmStatus.PENDING_ALARM.value == "PENDING_ALARM"
    assert AlarmStatus.ALARM.value == "ALARM"


def test_arming_status_is_armed() -> None:
    assert ArmingStatus.ARMED_HOME.is_armed is True
    assert ArmingStatus.ARMED_AWAY.is_armed is True
    assert ArmingStatus.DISARMED.is_armed is False


def test_sensor_type_members_exist() -> None:
    assert {t.value for t in SensorType} == {"DOOR", "WINDOW", "MOTION"}


def test_sensor_defaults_to_inactive() -> None:
    assert Sensor("Front Door", SensorType.DOOR).active is False


def test_sensor_equality_ignores_active_flag() -> None:
    """
    Two sensors with the same name and type are the same sensor.
    """
    a = Sensor("Front Door", SensorType.DOOR, active=True)
    b = Sensor("Front Door", SensorType.DOOR, active=False)

    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_sensor_identity_includes_type() -> None:
    assert Sensor("Garage", SensorType.DOOR) != Sensor("Garage", SensorType.MOTION)


def test_sensor_stays_in_set_after_flag_change() -> None:
    """
    Mutating ``active`` must not break set membership.
    """
    s = Sensor("Hallway", SensorType.MOTION)
    sensors = {s}

    s.active = True

    assert s in sensors
    assert Sensor("Hallway", SensorType.MOTION) in sensors
