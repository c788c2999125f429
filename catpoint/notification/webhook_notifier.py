from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from catpoint.notification.base import Severity, StatusNotification
from catpoint.notification.payload import build_envelope

logger = logging.getLogger(__name__)


class NotificationDeliveryError(RuntimeError):
    """A notification could not be delivered to its endpoint."""


@dataclass(frozen=True)
class WebhookConfig:
    """
    Settings for one webhook endpoint.

    Parameters
    ----------
    url
        Endpoint receiving the JSON envelope.
    auth_header
        Full Authorization header value, if the endpoint needs one.
    timeout_s
        Per-request timeout in seconds.
    verify_tls
        Whether to verify TLS certificates.
    min_severity
        Notifications graded below this are not sent.
    """

    url: str
    auth_header: Optional[str] = None
    timeout_s: float = 3.0
    verify_tls: bool = True
    min_severity: Severity = Severity.INFO


class WebhookNotifier:
    """
    Posts status notifications to a webhook as JSON envelopes.

    Each request carries ``X-Catpoint-Event`` and ``X-Catpoint-Severity``
    headers so receivers can route without parsing the body. Requests share
    one ``requests.Session``.
    """

    def __init__(self, cfg: WebhookConfig, session: Optional[requests.Session] = None):
        self._cfg = cfg
        self._session = session if session is not None else requests.Session()

    def notify(self, notification: StatusNotification) -> None:
        """
        Deliver one notification.

        Raises
        ------
        NotificationDeliveryError
            If the request fails or the endpoint answers with an error status.
        """
        severity = notification.severity
        event_type = notification.event.type.value
        if severity.rank < self._cfg.min_severity.rank:
            logger.debug("Skipping %s (%s below %s)", event_type, severity.value, self._cfg.min_severity.value)
            return

        headers = {
            "X-Catpoint-Event": event_type,
            "X-Catpoint-Severity": severity.value,
        }
        if self._cfg.auth_header:
            headers["Authorization"] = self._cfg.auth_header

        try:
            r = self._session.post(
                self._cfg.url,
                json=build_envelope(notification),
                headers=headers,
                timeout=self._cfg.timeout_s,
                verify=self._cfg.verify_tls,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            raise NotificationDeliveryError(f"Webhook delivery of {event_type} to {self._cfg.url} failed: {e}") from e
