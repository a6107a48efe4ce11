"""Background refresh of every cached city.

In polling mode the SDK keeps its cache warm by re-fetching all resident
cities on a fixed interval, starting with an immediate pass.
"""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler

from weather_sdk.config import POLL_INTERVAL
from weather_sdk.exceptions import WeatherSDKError
from weather_sdk.models import Entry
from weather_sdk.services.weather_api import Fetcher
from weather_sdk.utils.cache import WeatherCache

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "refresh-cached-cities"


@dataclass
class RefreshResult:
    """Result of one refresh pass."""

    total: int
    success: int
    failed: int
    duration_ms: int

    def __str__(self) -> str:
        return (
            f"Refresh complete: {self.success}/{self.total} successful, "
            f"{self.failed} failed ({self.duration_ms}ms)"
        )


class RefreshScheduler:
    """Periodically re-fetches every city held in a WeatherCache."""

    def __init__(
        self,
        cache: WeatherCache,
        fetcher: Fetcher,
        interval: timedelta = POLL_INTERVAL,
    ):
        self.cache = cache
        self.fetcher = fetcher
        self.interval = interval
        self._scheduler = None
        self._stopped = threading.Event()
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self):
        """Start polling. The first pass runs right away."""
        with self._lock:
            if self.running:
                return

            self._stopped.clear()
            self._scheduler = BackgroundScheduler()
            self._scheduler.add_job(
                self._scheduled_pass,
                'interval',
                seconds=self.interval.total_seconds(),
                id=REFRESH_JOB_ID,
                next_run_time=datetime.now(),
                max_instances=1,
                coalesce=True,
            )
            self._scheduler.start()
            logger.info(f"Polling started, interval {self.interval}")

    def shutdown(self):
        """
        Stop scheduling passes. Safe to call repeatedly or before start().

        A pass that is already running is left to finish. A pass the executor
        had queued but not yet started is skipped.
        """
        with self._lock:
            if not self.running:
                return
            self._stopped.set()
            self._scheduler.shutdown(wait=False)
            logger.info("Polling stopped")

    def _scheduled_pass(self):
        if self._stopped.is_set():
            logger.debug("Skipping refresh pass queued before shutdown")
            return None
        return self.refresh_all()

    def refresh_all(self) -> RefreshResult:
        """Run one pass over a snapshot of the cached cities."""
        start = time.time()
        success = failed = 0
        cities = []

        try:
            cities = self.cache.list_keys()
            for city in cities:
                if self._refresh_city(city):
                    success += 1
                else:
                    failed += 1
        except Exception:
            logger.exception("Refresh pass aborted")

        result = RefreshResult(
            total=len(cities),
            success=success,
            failed=failed,
            duration_ms=int((time.time() - start) * 1000),
        )
        logger.info(str(result))
        return result

    def _refresh_city(self, city: str) -> bool:
        try:
            payload = self.fetcher.fetch(city)
        except WeatherSDKError as e:
            logger.warning(f"Failed to refresh city {city}: {e.message}")
            return False
        except Exception:
            logger.exception(f"Unexpected error refreshing city {city}")
            return False

        self.cache.put(city, Entry.capture(payload))
        return True
