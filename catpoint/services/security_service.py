"""
Security decision engine.

This module contains the alarm state machine that reconciles three kinds of
input into one alarm status:
- sensor activation changes
- image classification results
- arming status changes

All state lives in the injected repository; the service reads it once per
decision, writes the outcome back, and then fans out notifications to the
registered status listeners.

State machine (alarm status)
----------------------------
- NO_ALARM      + sensor activates (armed)   -> PENDING_ALARM
- PENDING_ALARM + sensor (re)activates       -> ALARM
- PENDING_ALARM + last active sensor off     -> NO_ALARM
- ALARM         + sensor deactivates         -> PENDING_ALARM
- ALARM         + sensor activates           -> ALARM
- any           + threat image while armed   -> ALARM
- any           + clear image, no sensor on  -> NO_ALARM
- any           + disarm                     -> NO_ALARM
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Set, Type, TypeVar

from catpoint.core.repository import SecurityRepository
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor
from catpoint.image.classifier import ImageClassifier
from catpoint.services.status_listener import StatusListener

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 50.0
DEFAULT_THREAT_ARMING_MODES: FrozenSet[ArmingStatus] = frozenset({ArmingStatus.ARMED_HOME})

E = TypeVar("E", bound=Enum)


def _coerce_enum(value: Any, enum_cls: Type[E]) -> E:
    """
    Return ``value`` as a member of ``enum_cls``.

    Members pass through; their string values are accepted and converted.

    Raises
    ------
    ValueError
        If ``value`` is neither a member nor a member value.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid {enum_cls.__name__}: {value!r}") from None


@dataclass
class SecurityService:
    """
    Alarm state machine for the home security controller.

    Responsibilities
    ----------------
    - Apply sensor activation changes to the alarm status.
    - Apply image classification results to the alarm status.
    - Apply arming changes (disarm override, sensor reset on arming).
    - Pass sensor registration and status reads through to the repository.
    - Notify registered listeners, in registration order, after each write.

    Notes
    -----
    - The service is synchronous and performs no locking. Hosts that call it
      from several threads must serialize the calls themselves.
    - Repository and classifier errors propagate to the caller. A failed
      write is never notified.
    - A listener raising an exception is logged and skipped; the remaining
      listeners are still notified.

    Parameters
    ----------
    repository
        Storage for alarm status, arming status and sensors.
    classifier
        Image classifier used by :meth:`process_image`.
    confidence_threshold
        Confidence passed to the classifier for every image.
    threat_arming_modes
        Arming modes in which a detected threat raises the alarm.
    """

    repository: SecurityRepository
    classifier: ImageClassifier
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    threat_arming_modes: FrozenSet[ArmingStatus] = DEFAULT_THREAT_ARMING_MODES
    _listeners: Dict[int, StatusListener] = field(default_factory=dict, init=False, repr=False)
    _threat_detected: bool = field(default=False, init=False, repr=False)

    # --- Listener registry ---
    # Keyed by id(); insertion order is notification order.
    def add_status_listener(self, listener: StatusListener) -> None:
        self._listeners.setdefault(id(listener), listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        self._listeners.pop(id(listener), None)

    @property
    def status_listeners(self) -> List[StatusListener]:
        """Registered listeners in registration order."""
        return list(self._listeners.values())

    def _notify(self, callback: str, *args: Any) -> None:
        for listener in list(self._listeners.values()):
            method = getattr(listener, callback, None)
            if method is None:
                continue
            try:
                method(*args)
            except Exception:
                logger.exception("Status listener %r failed in %s", listener, callback)

    # --- Repository pass-through ---
    def get_alarm_status(self) -> AlarmStatus:
        return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        self.repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self.repository.remove_sensor(sensor)

    @property
    def threat_detected(self) -> bool:
        """Result of the most recent image classification."""
        return self._threat_detected

    # --- Status writes ---
    def set_alarm_status(self, status: AlarmStatus) -> None:
        """
        Write the alarm status and notify listeners.

        Parameters
        ----------
        status
            New alarm status (member or its string value).

        Raises
        ------
        ValueError
            If ``status`` is not a valid AlarmStatus.
        """
        status = _coerce_enum(status, AlarmStatus)
        self.repository.set_alarm_status(status)
        logger.info("Alarm status -> %s", status.value)
        self._notify("on_alarm_status_changed", status)

    def set_arming_status(self, status: ArmingStatus) -> None:
        """
        Change the arming mode.

        Disarming forces NO_ALARM. Arming resets every sensor to inactive
        directly (the reset never escalates the alarm) and, if the last
        classified image showed a threat and the new mode is a threat arming
        mode, raises the alarm.

        Parameters
        ----------
        status
            New arming status (member or its string value).

        Raises
        ------
        ValueError
            If ``status`` is not a valid ArmingStatus.
        """
        status = _coerce_enum(status, ArmingStatus)
        self.repository.set_arming_status(status)
        logger.info("Arming status -> %s", status.value)

        if not status.is_armed:
            self.set_alarm_status(AlarmStatus.NO_ALARM)
        else:
            self._reset_sensors()
            if self._threat_detected and status in self.threat_arming_modes:
                self.set_alarm_status(AlarmStatus.ALARM)

        self._notify("on_arming_status_changed", status)

    def _reset_sensors(self) -> None:
        for sensor in self.repository.get_sensors():
            sensor.active = False
            self.repository.update_sensor(sensor)
        self._notify("on_sensor_status_changed")

    # --- Sensor events ---
    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """
        Apply a sensor activation change.

        Deactivating an already inactive sensor does nothing at all.
        Otherwise the alarm status rule runs first, then the sensor flag is
        written through ``update_sensor``.

        Parameters
        ----------
        sensor
            Sensor whose state changed.
        active
            New activation state.

        Raises
        ------
        TypeError
            If ``active`` is not a bool.
        """
        if not isinstance(active, bool):
            raise TypeError(f"active must be a bool, got {type(active).__name__}")

        if not active and not sensor.active:
            logger.debug("Sensor %s already inactive; ignoring", sensor.name)
            return

        if active:
            self._handle_sensor_activated()
        else:
            self._handle_sensor_deactivated(sensor)

        sensor.active = active
        self.repository.update_sensor(sensor)
        self._notify("on_sensor_status_changed")

    def _handle_sensor_activated(self) -> None:
        if not self.repository.get_arming_status().is_armed:
            return

        alarm = self.repository.get_alarm_status()
        if alarm == AlarmStatus.NO_ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm == AlarmStatus.PENDING_ALARM:
            self.set_alarm_status(AlarmStatus.ALARM)

    def _handle_sensor_deactivated(self, sensor: Sensor) -> None:
        alarm = self.repository.get_alarm_status()
        if alarm == AlarmStatus.ALARM:
            self.set_alarm_status(AlarmStatus.PENDING_ALARM)
        elif alarm == AlarmStatus.PENDING_ALARM:
            # The sensor being switched off still carries its old flag here.
            others_active = any(s.active for s in self.repository.get_sensors() if s != sensor)
            if not others_active:
                self.set_alarm_status(AlarmStatus.NO_ALARM)

    # --- Image events ---
    def process_image(self, image: Any) -> None:
        """
        Classify a camera image and apply the result.

        A threat while armed in a threat arming mode raises the alarm. A clear
        image resets to NO_ALARM only when no sensor is currently active.

        Parameters
        ----------
        image
            Camera image passed unchanged to the classifier.
        """
        detected = bool(self.classifier.contains_threat(image, self.confidence_threshold))
        self._threat_detected = detected

        if detected:
            if self.repository.get_arming_status() in self.threat_arming_modes:
                self.set_alarm_status(AlarmStatus.ALARM)
        elif not any(s.active for s in self.repository.get_sensors()):
            self.set_alarm_status(AlarmStatus.NO_ALARM)

        self._notify("on_threat_detected", detected)
