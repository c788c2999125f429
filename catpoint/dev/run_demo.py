from __future__ import annotations

import sys
from typing import Optional

from catpoint.bootstrap import build_security_system, configure_logging
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType


class ConsoleStatusListener:
    """Prints every status callback."""

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        print(f"   [alarm]  {status.value}")

    def on_arming_status_changed(self, status: ArmingStatus) -> None:
        print(f"   [arming] {status.value}")

    def on_sensor_status_changed(self) -> None:
        pass

    def on_threat_detected(self, detected: bool) -> None:
        print(f"   [camera] threat={'yes' if detected else 'no'}")


def main(config_path: Optional[str] = None) -> None:
    wiring = build_security_system(config_path)
    configure_logging(wiring.config.logging.level)
    service = wiring.service
    service.add_status_listener(ConsoleStatusListener())

    sensors = sorted(service.get_sensors(), key=lambda s: s.name)
    if not sensors:
        sensors = [Sensor("Front Door", SensorType.DOOR), Sensor("Hallway", SensorType.MOTION)]
        for s in sensors:
            service.add_sensor(s)
    door = sensors[0]

    print(">> A) Arm (home)")
    service.set_arming_status(ArmingStatus.ARMED_HOME)

    print(f"\n>> B) Activate {door.name} twice")
    service.change_sensor_activation_status(door, True)
    service.change_sensor_activation_status(door, True)

    print(f"\n>> C) Deactivate {door.name} (acknowledge)")
    service.change_sensor_activation_status(door, False)

    print("\n>> D) Feed 5 camera frames")
    for i in range(5):
        service.process_image(f"frame-{i}")
        print(f"   status={service.get_alarm_status().value}")

    print("\n>> E) Disarm")
    service.set_arming_status(ArmingStatus.DISARMED)

    print(">> DONE")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
