from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from catpoint.core.repository import SecurityRepository
from catpoint.notification.base import StatusNotification


def _iso(ts: datetime) -> str:
    return ts.isoformat(timespec="seconds")


def _value(v: Any) -> Any:
    return None if v is None else getattr(v, "value", v)


def build_snapshot(repository: SecurityRepository) -> Dict[str, Any]:
    """
    Read the current statuses and sensor states from a repository.

    Parameters
    ----------
    repository
        Repository the snapshot is read from.

    Returns
    -------
    dict
        Keys: "alarm_status", "arming_status", "sensors_total",
        "sensors_active" and "sensors" (sorted by name, then type).
    """
    sensors = sorted(repository.get_sensors(), key=lambda s: (s.name, s.sensor_type.value))
    return {
        "alarm_status": _value(repository.get_alarm_status()),
        "arming_status": _value(repository.get_arming_status()),
        "sensors_total": len(sensors),
        "sensors_active": sum(1 for s in sensors if s.active),
        "sensors": [
            {"name": s.name, "sensor_type": s.sensor_type.value, "active": s.active}
            for s in sensors
        ],
    }


def build_envelope(notification: StatusNotification) -> Dict[str, Any]:
    """
    JSON body sent to remote endpoints for one status notification.

    Returns
    -------
    dict
        Keys: "type", "source", "severity", "event" and "snapshot".
    """
    ev = notification.event
    return {
        "type": "status_event",
        "source": notification.source,
        "severity": notification.severity.value,
        "event": {
            "type": ev.type.value,
            "timestamp": _iso(ev.timestamp),
            "alarm_status": _value(ev.alarm_status),
            "arming_status": _value(ev.arming_status),
            "threat_detected": ev.threat_detected,
        },
        "snapshot": notification.snapshot,
    }
