"""
Unit tests for catpoint.core.config.yaml_config.

These tests validate:
- defaults for an empty document
- parsing of every section into typed config objects
- path resolution through the CATPOINT_CONFIG env var
- rejection of missing files, non-mapping roots and unknown enum names
"""

from __future__ import annotations

from pathlib import Path

import pytest

from catpoint.core.config.yaml_config import SensorSeed, load_app_config
from catpoint.domain.models import ArmingStatus, SensorType
from catpoint.notification.base import Severity


def _write(tmp_path: Path, text: str) -> str:
    p = tmp_path / "config.yaml"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_empty_document_uses_defaults(tmp_path: Path) -> None:
    cfg = load_app_config(_write(tmp_path, ""))

    assert cfg.logging.level == "INFO"
    assert cfg.image.confidence_threshold == 50.0
    assert cfg.image.threat_arming_modes == frozenset({ArmingStatus.ARMED_HOME})
    assert cfg.image.seed is None
    assert cfg.storage.path is None
    assert cfg.sensors == []
    assert cfg.webhook is None


def test_full_document(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
logging:
  level: debug
image:
  confidence_threshold: 70
  threat_arming_modes: [ARMED_HOME, armed_away]
  seed: 7
storage:
  path: /tmp/catpoint.json
sensors:
  - {name: Front Door, type: DOOR}
  - {name: Hallway, type: motion}
webhook:
  url: https://example.com/hook
  auth_header: TOKEN
  timeout_s: 1.5
  verify_tls: false
  min_severity: warning
""",
    )

    cfg = load_app_config(path)

    assert cfg.logging.level == "DEBUG"
    assert cfg.image.confidence_threshold == 70.0
    assert cfg.image.threat_arming_modes == frozenset({ArmingStatus.ARMED_HOME, ArmingStatus.ARMED_AWAY})
    assert cfg.image.seed == 7
    assert cfg.storage.path == "/tmp/catpoint.json"
    assert cfg.sensors == [
        SensorSeed("Front Door", SensorType.DOOR),
        SensorSeed("Hallway", SensorType.MOTION),
    ]
    assert cfg.webhook is not None
    assert cfg.webhook.url == "https://example.com/hook"
    assert cfg.webhook.auth_header == "TOKEN"
    assert cfg.webhook.timeout_s == 1.5
    assert cfg.webhook.verify_tls is False
    assert cfg.webhook.min_severity is Severity.WARNING


def test_webhook_without_url_is_disabled(tmp_path: Path) -> None:
    cfg = load_app_config(_write(tmp_path, "webhook:\n  timeout_s: 2\n"))
    assert cfg.webhook is None


def test_env_var_resolution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write(tmp_path, "image:\n  confidence_threshold: 12\n")
    monkeypatch.setenv("CATPOINT_CONFIG", path)

    cfg = load_app_config()

    assert cfg.image.confidence_threshold == 12.0


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "missing.yaml"))


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_app_config(_write(tmp_path, "- a\n- b\n"))


def test_unknown_sensor_type_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="sensors\\[0\\]"):
        load_app_config(_write(tmp_path, "sensors:\n  - {name: Roof, type: LASER}\n"))


def test_sensor_without_name_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_app_config(_write(tmp_path, "sensors:\n  - {type: DOOR}\n"))


def test_disarmed_threat_mode_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_app_config(_write(tmp_path, "image:\n  threat_arming_modes: [DISARMED]\n"))


def test_single_threat_mode_may_be_a_scalar(tmp_path: Path) -> None:
    cfg = load_app_config(_write(tmp_path, "image:\n  threat_arming_modes: armed_away\n"))
    assert cfg.image.threat_arming_modes == frozenset({ArmingStatus.ARMED_AWAY})


def test_threat_modes_mapping_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="must be a list"):
        load_app_config(_write(tmp_path, "image:\n  threat_arming_modes: {ARMED_HOME: true}\n"))


def test_seed_to_sensor() -> None:
    sensor = SensorSeed("Front Door", SensorType.DOOR).to_sensor()
    assert sensor.name == "Front Door"
    assert sensor.active is False


def test_unknown_webhook_severity_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="webhook.min_severity"):
        load_app_config(_write(tmp_path, "webhook:\n  url: https://example.com/hook\n  min_severity: LOUD\n"))
