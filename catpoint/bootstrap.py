from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from catpoint.core.config.yaml_config import AppConfig, load_app_config
from catpoint.core.repository import SecurityRepository
from catpoint.core.state.json_repository import JsonFileSecurityRepository
from catpoint.core.state.memory_repository import InMemorySecurityRepository
from catpoint.image.classifier import ImageClassifier, RandomThreatClassifier
from catpoint.notification.status_notifier import NotifierStatusListener
from catpoint.notification.webhook_notifier import WebhookConfig, WebhookNotifier
from catpoint.services.security_service import SecurityService


@dataclass(frozen=True)
class SecurityWiring:
    """Everything a host application needs to drive the system."""
    config: AppConfig
    repository: SecurityRepository
    service: SecurityService


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_repository(cfg: AppConfig) -> SecurityRepository:
    if cfg.storage.path:
        repository: SecurityRepository = JsonFileSecurityRepository(cfg.storage.path)
    else:
        repository = InMemorySecurityRepository()

    known = repository.get_sensors()
    for seed in cfg.sensors:
        sensor = seed.to_sensor()
        if sensor not in known:
            repository.add_sensor(sensor)
    return repository


def build_webhook_listener(cfg: AppConfig, repository: SecurityRepository) -> Optional[NotifierStatusListener]:
    if cfg.webhook is None:
        return None

    auth_header = cfg.webhook.auth_header
    if auth_header and not auth_header.startswith("Bearer "):
        auth_header = f"Bearer {auth_header}"

    return NotifierStatusListener(
        repository=repository,
        notifiers=[
            WebhookNotifier(
                WebhookConfig(
                    url=cfg.webhook.url,
                    auth_header=auth_header,
                    timeout_s=cfg.webhook.timeout_s,
                    verify_tls=cfg.webhook.verify_tls,
                    min_severity=cfg.webhook.min_severity,
                )
            )
        ],
    )


def build_security_system(
    config_path: Optional[str] = None,
    classifier: Optional[ImageClassifier] = None,
) -> SecurityWiring:
    cfg = load_app_config(config_path)

    # --- STATE ---
    repository = build_repository(cfg)

    # --- SERVICE ---
    service = SecurityService(
        repository=repository,
        classifier=classifier or RandomThreatClassifier(seed=cfg.image.seed),
        confidence_threshold=cfg.image.confidence_threshold,
        threat_arming_modes=cfg.image.threat_arming_modes,
    )

    # --- NOTIFICATIONS ---
    webhook_listener = build_webhook_listener(cfg, repository)
    if webhook_listener is not None:
        service.add_status_listener(webhook_listener)

    return SecurityWiring(config=cfg, repository=repository, service=service)
