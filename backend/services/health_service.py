"""
Liveness Prober

Polled frequently by orchestrators: one `SELECT 1` with a short timeout,
translated into a status value. Never raises.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from repositories.store import StoreGateway
from utils.datetime_utils import utc_now
from utils.errors import RegistryError

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_DEGRADED = "degraded"


@dataclass(frozen=True)
class ProcessClock:
    """Captured once when the app is built; read-only afterwards."""
    started_monotonic: float = field(default_factory=time.monotonic)
    started_at: datetime = field(default_factory=utc_now)

    def uptime_seconds(self) -> int:
        return max(0, int(time.monotonic() - self.started_monotonic))


@dataclass
class HealthReport:
    status: str
    uptime_secs: int
    version: str
    timestamp: str

    @property
    def is_ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "version": self.version,
            "timestamp": self.timestamp,
            "uptime_secs": self.uptime_secs,
        }


class LivenessProber:

    def __init__(
        self,
        store: StoreGateway,
        clock: ProcessClock,
        version: str = "0.1.0",
        probe_timeout: Optional[float] = 2.0
    ):
        self.store = store
        self.clock = clock
        self.version = version
        self.probe_timeout = probe_timeout

    async def check(self) -> HealthReport:
        uptime = self.clock.uptime_seconds()
        now = utc_now().isoformat()

        try:
            await self.store.ping(timeout=self.probe_timeout)
        except RegistryError:
            logger.warning(f"Health check degraded - db unreachable (uptime={uptime}s)")
            return HealthReport(STATUS_DEGRADED, uptime, self.version, now)
        except Exception as e:
            # Liveness must answer even when the failure is unclassified
            logger.exception(f"Health check degraded - unexpected {type(e).__name__} (uptime={uptime}s)")
            return HealthReport(STATUS_DEGRADED, uptime, self.version, now)

        logger.debug(f"Health check passed (uptime={uptime}s)")
        return HealthReport(STATUS_OK, uptime, self.version, now)
