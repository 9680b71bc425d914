"""Periodic health polling of the studio backend.

A failed poll keeps an error banner up until the next successful tick; there
is no retry in between and no backoff.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from src.exceptions import NetworkError
from src.schemas.studio import ApiStatus
from src.services.studio_rpc_client import StudioRpcClient
from src.utils.interval_timer import AsyncioIntervalTimer, IntervalTimer

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Failed to connect to API"


@dataclass
class HealthState:
    api_status: ApiStatus | None = None
    error: str | None = None
    loading: bool = True
    last_checked_at: datetime | None = None

    @property
    def online(self) -> bool:
        return self.api_status is not None and self.error is None

    @property
    def indicator(self) -> str:
        return "Online" if self.online else "Connecting..."


class HealthMonitor:
    def __init__(
        self,
        client: StudioRpcClient,
        *,
        interval_s: float = 30.0,
        timer: IntervalTimer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client = client
        self._interval_s = interval_s
        self._timer: IntervalTimer = timer or AsyncioIntervalTimer()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._state = HealthState()
        self._stopped = False

    @property
    def state(self) -> HealthState:
        return self._state

    @property
    def running(self) -> bool:
        return self._timer.active

    async def start(self) -> None:
        """Poll once now, then every interval until stop()."""
        await self.check()
        # stop() may have run while the first check was in flight
        if not self._stopped and not self._timer.active:
            self._timer.start(self._interval_s, self.check)

    def stop(self) -> None:
        self._stopped = True
        self._timer.cancel()

    async def check(self) -> HealthState:
        try:
            status = await self._client.get_health()
        except NetworkError as e:
            if self._state.error is None:
                logger.warning("Health check failed: %s", e.message)
            self._state.api_status = None
            self._state.error = CONNECTION_ERROR_MESSAGE
        else:
            if self._state.error is not None:
                logger.info("API reachable again (status=%s)", status.status)
            self._state.api_status = status
            self._state.error = None
        finally:
            self._state.loading = False
            self._state.last_checked_at = self._clock()
        return self._state
