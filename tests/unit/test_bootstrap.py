"""
Unit tests for catpoint.bootstrap.

These tests validate wiring from a YAML config:
- in-memory vs. JSON file repository selection
- configured sensors seeded once (existing sensors keep their state)
- service parameters taken from the image section
- webhook listener registration and Bearer prefixing
"""

from __future__ import annotations

from pathlib import Path

from catpoint.bootstrap import build_security_system, build_webhook_listener
from catpoint.core.config.yaml_config import AppConfig, WebhookConfigData
from catpoint.core.state.json_repository import JsonFileSecurityRepository
from catpoint.core.state.memory_repository import InMemorySecurityRepository
from catpoint.domain.models import ArmingStatus, Sensor, SensorType
from catpoint.image.classifier import RandomThreatClassifier
from catpoint.notification.base import Severity
from catpoint.notification.status_notifier import NotifierStatusListener


class _NeverThreat:
    def contains_threat(self, image: object, confidence_threshold: float) -> bool:
        return False


def _write(tmp_path: Path, text: str) -> str:
    p = tmp_path / "config.yaml"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_in_memory_system_with_seeded_sensors(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
image:
  confidence_threshold: 80
  threat_arming_modes: [ARMED_AWAY]
sensors:
  - {name: Front Door, type: DOOR}
  - {name: Hallway, type: MOTION}
""",
    )
    classifier = _NeverThreat()

    wiring = build_security_system(path, classifier=classifier)

    assert isinstance(wiring.repository, InMemorySecurityRepository)
    assert {s.name for s in wiring.service.get_sensors()} == {"Front Door", "Hallway"}
    assert wiring.service.confidence_threshold == 80.0
    assert wiring.service.threat_arming_modes == frozenset({ArmingStatus.ARMED_AWAY})
    assert wiring.service.classifier is classifier
    assert wiring.service.status_listeners == []


def test_default_classifier_is_random(tmp_path: Path) -> None:
    wiring = build_security_system(_write(tmp_path, "image:\n  seed: 3\n"))
    assert isinstance(wiring.service.classifier, RandomThreatClassifier)


def test_json_storage_keeps_existing_sensor_state(tmp_path: Path) -> None:
    state = tmp_path / "state.json"
    existing = JsonFileSecurityRepository(state)
    existing.add_sensor(Sensor("Front Door", SensorType.DOOR, active=True))

    path = _write(
        tmp_path,
        f"""
storage:
  path: {state.as_posix()}
sensors:
  - {{name: Front Door, type: DOOR}}
  - {{name: Hallway, type: MOTION}}
""",
    )

    wiring = build_security_system(path, classifier=_NeverThreat())

    assert isinstance(wiring.repository, JsonFileSecurityRepository)
    by_name = {s.name: s for s in wiring.service.get_sensors()}
    assert set(by_name) == {"Front Door", "Hallway"}
    assert by_name["Front Door"].active is True


def test_webhook_listener_registered(tmp_path: Path) -> None:
    path = _write(tmp_path, "webhook:\n  url: https://example.com/hook\n")

    wiring = build_security_system(path, classifier=_NeverThreat())

    (listener,) = wiring.service.status_listeners
    assert isinstance(listener, NotifierStatusListener)


def test_webhook_auth_header_gets_bearer_prefix() -> None:
    cfg = AppConfig(
        webhook=WebhookConfigData(url="https://example.com/hook", auth_header="TOKEN", min_severity=Severity.CRITICAL)
    )
    listener = build_webhook_listener(cfg, InMemorySecurityRepository())

    assert listener is not None
    (notifier,) = listener._notifiers
    assert notifier._cfg.auth_header == "Bearer TOKEN"
    assert notifier._cfg.min_severity is Severity.CRITICAL


def test_no_webhook_means_no_listener() -> None:
    assert build_webhook_listener(AppConfig(), InMemorySecurityRepository()) is None
