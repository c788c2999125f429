from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Type, TypeVar

import yaml

from catpoint.domain.models import ArmingStatus, Sensor, SensorType
from catpoint.notification.base import Severity

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class LoggingConfig:
    """Log level applied by the dev entrypoints."""
    level: str = "INFO"


@dataclass(frozen=True)
class ImageConfig:
    """Image classification parameters used by the security service."""
    confidence_threshold: float = 50.0
    threat_arming_modes: FrozenSet[ArmingStatus] = frozenset({ArmingStatus.ARMED_HOME})
    seed: Optional[int] = None


@dataclass(frozen=True)
class StorageConfig:
    """Repository location. ``path=None`` selects the in-memory repository."""
    path: Optional[str] = None


@dataclass(frozen=True)
class SensorSeed:
    """Sensor registered at startup if the repository does not know it yet."""
    name: str
    sensor_type: SensorType

    def to_sensor(self) -> Sensor:
        return Sensor(name=self.name, sensor_type=self.sensor_type)


@dataclass(frozen=True)
class WebhookConfigData:
    """Webhook notifier configuration (URL, auth and severity filter)."""
    url: str
    auth_header: Optional[str] = None
    timeout_s: float = 3.0
    verify_tls: bool = True
    min_severity: Severity = Severity.INFO


@dataclass(frozen=True)
class AppConfig:
    """
    Root application configuration loaded from YAML.

    ``webhook`` is None when no webhook section (or no URL) is configured.
    """
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    image: ImageConfig = field(default_factory=ImageConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    sensors: List[SensorSeed] = field(default_factory=list)
    webhook: Optional[WebhookConfigData] = None


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("config.yaml must contain a YAML mapping at the root")
    return data


def _enum(enum_cls: Type[E], raw: Any, where: str) -> E:
    try:
        return enum_cls(str(raw).upper())
    except ValueError:
        names = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"{where}: unknown {enum_cls.__name__} {raw!r} (expected one of {names})") from None


def _resolve_default_config_path() -> Path:
    """
    Resolve config.yaml location.

    Priority:
    1) CATPOINT_CONFIG env var if provided
    2) config.yaml next to the executable
    3) ./config.yaml in current working directory
    """
    env = os.getenv("CATPOINT_CONFIG")
    if env:
        return Path(env).expanduser().resolve()

    exe_dir = Path(sys.executable).resolve().parent
    candidate = exe_dir / "config.yaml"
    if candidate.exists():
        return candidate

    return Path("config.yaml").resolve()


def load_app_config(path: Optional[str] = None) -> AppConfig:
    """
    Load application configuration from YAML and convert into typed config objects.

    Parameters
    ----------
    path
        Explicit path to config.yaml. If None, uses default resolution.

    Returns
    -------
    AppConfig
        Parsed and validated configuration.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If required fields are missing or invalid.
    """
    cfg_path = Path(path).expanduser().resolve() if path else _resolve_default_config_path()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found: {cfg_path}")

    raw = _read_yaml(cfg_path)

    # ---- logging ----
    lg = raw.get("logging") or {}
    logging_cfg = LoggingConfig(level=str(lg.get("level", "INFO")).upper())

    # ---- image ----
    im = raw.get("image") or {}
    modes_raw = im.get("threat_arming_modes", [ArmingStatus.ARMED_HOME.value])
    if isinstance(modes_raw, str):
        modes_raw = [modes_raw]
    elif not isinstance(modes_raw, list):
        raise ValueError("image.threat_arming_modes must be a list of arming statuses")
    modes = frozenset(_enum(ArmingStatus, m, "image.threat_arming_modes") for m in modes_raw)
    if ArmingStatus.DISARMED in modes:
        raise ValueError("image.threat_arming_modes must only list armed modes")
    seed = im.get("seed")
    image = ImageConfig(
        confidence_threshold=float(im.get("confidence_threshold", 50.0)),
        threat_arming_modes=modes,
        seed=None if seed is None else int(seed),
    )

    # ---- storage ----
    st = raw.get("storage") or {}
    storage_path = st.get("path")
    storage = StorageConfig(path=None if storage_path is None else str(storage_path))

    # ---- sensors ----
    sensors: List[SensorSeed] = []
    for i, item in enumerate(raw.get("sensors") or []):
        try:
            name = str(item["name"])
            type_raw = item["type"]
        except (KeyError, TypeError):
            raise ValueError(f"sensors[{i}] requires 'name' and 'type'") from None
        sensors.append(SensorSeed(name=name, sensor_type=_enum(SensorType, type_raw, f"sensors[{i}]")))

    # ---- webhook ----
    w = raw.get("webhook") or {}
    webhook: Optional[WebhookConfigData] = None
    if w.get("url"):
        webhook = WebhookConfigData(
            url=str(w["url"]),
            auth_header=w.get("auth_header"),
            timeout_s=float(w.get("timeout_s", 3.0)),
            verify_tls=bool(w.get("verify_tls", True)),
            min_severity=_enum(Severity, w.get("min_severity", Severity.INFO.value), "webhook.min_severity"),
        )

    return AppConfig(
        logging=logging_cfg,
        image=image,
        storage=storage,
        sensors=sensors,
        webhook=webhook,
    )
