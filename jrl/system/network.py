import logging
import time
from typing import Optional

import requests

from jrl.system.schemas import NetworkStatus

logger = logging.getLogger(__name__)

# Speed thresholds (kbps), best first
SPEED_THRESHOLDS = (
    ("excellent", 1000),
    ("good", 500),
    ("fair", 200),
    ("slow", 50),
    ("very_slow", 0),
)

# Latency bands (ms) mapped to a representative speed (kbps)
LATENCY_BANDS = (
    (50, 3000),
    (100, 1500),
    (200, 750),
    (500, 300),
)
SLOW_LATENCY_SPEED = 100


def connection_quality(speed_kbps: float) -> str:
    for quality, minimum in SPEED_THRESHOLDS:
        if speed_kbps >= minimum:
            return quality
    return "very_slow"


def estimate_speed_from_latency(latency_ms: float) -> int:
    for limit, speed in LATENCY_BANDS:
        if latency_ms < limit:
            return speed
    return SLOW_LATENCY_SPEED


class NetworkMonitor:
    """
    Online/offline and connection-quality signal.

    The journal engine only reads ``is_online()``; the rest feeds the
    network indicator.
    """

    def __init__(self, online: bool = True):
        self._online = online
        self._speed: float = 0
        self._latency: float = 0
        self._quality = "unknown"

    def set_online(self, online: bool) -> None:
        if online != self._online:
            logger.info("Network is now %s", "online" if online else "offline")
        self._online = online
        if not online:
            self._quality = "unknown"

    def is_online(self) -> bool:
        return self._online

    def record(self, speed_kbps: Optional[float] = None, latency_ms: Optional[float] = None) -> NetworkStatus:
        """
        Record a measurement. A missing speed is estimated from the latency.
        """
        if latency_ms is not None:
            self._latency = latency_ms
        if speed_kbps is None and latency_ms is not None:
            speed_kbps = estimate_speed_from_latency(latency_ms)
        if speed_kbps is not None:
            self._speed = speed_kbps
            self._quality = connection_quality(speed_kbps)
        return self.status()

    def is_good_connection(self) -> bool:
        return self._online and self._quality in ("excellent", "good")

    def status(self) -> NetworkStatus:
        return NetworkStatus(
            status="online" if self._online else "offline",
            quality=self._quality,
            speed=self._speed,
            latency=self._latency,
        )

    def probe(self, url: str, timeout: float = 5.0) -> NetworkStatus:
        """
        Measure latency with a HEAD request. A failed probe marks the monitor offline.
        """
        start = time.perf_counter()
        try:
            resp = requests.head(url, timeout=timeout, allow_redirects=True)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Network probe to {url} failed: {e}")
            self.set_online(False)
            return self.status()
        latency_ms = (time.perf_counter() - start) * 1000
        self.set_online(True)
        return self.record(latency_ms=latency_ms)
