from __future__ import annotations

from typing import Protocol

from catpoint.domain.models import AlarmStatus, ArmingStatus


class StatusListener(Protocol):
    """
    Protocol interface for observers of the security service.

    Any object implementing these callbacks can be registered with
    ``SecurityService.add_status_listener``; inheritance is not required.
    Listeners are held by identity and need not be hashable. A callback
    the listener does not define is skipped. Callbacks run synchronously
    after the repository write they report.

    Methods
    -------
    on_alarm_status_changed(status)
        The alarm status was written.
    on_arming_status_changed(status)
        The arming status was written.
    on_sensor_status_changed()
        One or more sensor flags were written; refresh any sensor views.
    on_threat_detected(detected)
        An image was classified.
    """

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        ...

    def on_arming_status_changed(self, status: ArmingStatus) -> None:
        ...

    def on_sensor_status_changed(self) -> None:
        ...

    def on_threat_detected(self, detected: bool) -> None:
        ...
