"""Delayed, concurrent execution of observation batches.

Devices are not always ready to accept observe requests right after they
register, so a batch waits a short grace delay before fanning out. All tasks
of a batch run concurrently; a failing setup never stops its siblings, and
the batch outcome is only logged.
"""

from __future__ import annotations

import asyncio
import contextlib
import functools
import logging
from typing import Dict, Iterable, List, Optional, Set

from ..core.domain.contracts import IResourceObservationService
from ..core.domain.device import Device
from ..core.domain.errors import ObservationSetupFailure
from ..core.monitoring.metrics import OBSERVATION_BATCHES, OBSERVATION_SETUPS
from ..core.monitoring.stats import ObservationStats
from .config import ObservationConfig
from .relay import UpdateRelay
from .tasks import BatchOutcome, ObservationTask

logger = logging.getLogger(__name__)


class ObservationScheduler:
    """Runs observation batches in the background.

    Usage:
        scheduler = ObservationScheduler(service, relay)
        scheduler.schedule(device, tasks)   # returns immediately
        ...
        scheduler.cancel(device.internal_id)  # device gone before the delay
    """

    def __init__(
        self,
        service: IResourceObservationService,
        relay: UpdateRelay,
        config: Optional[ObservationConfig] = None,
        stats: Optional[ObservationStats] = None,
    ):
        self._service = service
        self._relay = relay
        self._config = config or ObservationConfig.from_env()
        self._stats = stats if stats is not None else ObservationStats()

        # Batches still waiting on their delay, per device internal id
        self._pending: Dict[str, Set[asyncio.Task]] = {}

    @property
    def stats(self) -> ObservationStats:
        return self._stats

    def schedule(
        self,
        device: Device,
        tasks: Iterable[ObservationTask],
        delay: Optional[float] = None,
    ) -> Optional[asyncio.Task]:
        """Schedules a batch and returns without waiting for it.

        Must be called from a running event loop.

        Args:
            device: Device the batch belongs to
            tasks: Work list produced by the builder
            delay: Seconds to wait before the fan-out (default from config)

        Returns:
            Background task resolving to a BatchOutcome, or None when the
            work list is empty
        """
        work = list(tasks)
        if not work:
            logger.debug("[SCHEDULER] Nothing to observe for device=%s", device.internal_id)
            return None

        wait = self._config.resolve_delay(delay)
        loop = asyncio.get_running_loop()
        batch = loop.create_task(
            self._run_delayed(device, work, wait),
            name=f"lwm2m-observe-{device.internal_id}",
        )
        self._pending.setdefault(device.internal_id, set()).add(batch)
        batch.add_done_callback(functools.partial(self._forget, device.internal_id))

        self._stats.batches_scheduled += 1
        OBSERVATION_BATCHES.labels(status="scheduled").inc()
        logger.info(
            "[SCHEDULER] Scheduled %d observers for device=%s in %.3fs",
            len(work),
            device.internal_id,
            wait,
        )
        return batch

    def cancel(self, device_internal_id: str) -> int:
        """Drops batches of a device that are still waiting on their delay.

        Batches already fanning out are left to complete.

        Returns:
            Number of batches dropped
        """
        pending = self._pending.pop(device_internal_id, set())
        dropped = 0
        for batch in pending:
            if batch.cancel():
                dropped += 1

        if dropped:
            self._stats.batches_cancelled += dropped
            OBSERVATION_BATCHES.labels(status="cancelled").inc(dropped)
            logger.info(
                "[SCHEDULER] Dropped %d pending observation batches for device=%s",
                dropped,
                device_internal_id,
            )
        return dropped

    def pending_count(self, device_internal_id: Optional[str] = None) -> int:
        """Batches still waiting on their delay."""
        if device_internal_id is not None:
            return len(self._pending.get(device_internal_id, ()))
        return sum(len(batches) for batches in self._pending.values())

    async def shutdown(self) -> None:
        """Cancels every pending batch and waits for them to finish."""
        batches = [batch for group in self._pending.values() for batch in group]
        for device_internal_id in list(self._pending):
            self.cancel(device_internal_id)
        if batches:
            await asyncio.gather(*batches, return_exceptions=True)
        logger.info("[SCHEDULER] Stopped. %s", self._stats)

    async def run_batch(self, device: Device, tasks: List[ObservationTask]) -> BatchOutcome:
        """Runs every task concurrently and aggregates the failures."""
        limit = self._config.max_concurrent_setups
        semaphore = asyncio.Semaphore(limit) if limit > 0 else None

        results = await asyncio.gather(
            *(self._run_task(task, semaphore) for task in tasks),
            return_exceptions=True,
        )

        failures: List[ObservationSetupFailure] = []
        for task, result in zip(tasks, results):
            if isinstance(result, ObservationSetupFailure):
                failures.append(result)
            elif isinstance(result, BaseException):
                failures.append(
                    ObservationSetupFailure(task.attribute.name, task.address, result)
                )

        outcome = BatchOutcome(
            device_internal_id=device.internal_id,
            attempted=len(tasks),
            failures=failures,
        )
        self._record(outcome)

        if outcome.ok:
            logger.debug("[SCHEDULER] Observers created successfully. %s", outcome.summary())
        else:
            logger.error(
                "[SCHEDULER] Could not complete the observer creation processes due to the following error: %s",
                outcome.summary(),
            )
        return outcome

    async def _run_delayed(
        self,
        device: Device,
        tasks: List[ObservationTask],
        wait: float,
    ) -> BatchOutcome:
        await asyncio.sleep(wait)
        # Past the delay the batch can no longer be dropped
        current = asyncio.current_task()
        if current is not None:
            self._forget(device.internal_id, current)
        return await self.run_batch(device, tasks)

    async def _run_task(
        self,
        task: ObservationTask,
        semaphore: Optional[asyncio.Semaphore],
    ) -> None:
        self._stats.setups_attempted += 1
        async with semaphore if semaphore is not None else contextlib.nullcontext():
            await task.run(self._service, self._relay)

    def _record(self, outcome: BatchOutcome) -> None:
        self._stats.batches_completed += 1
        self._stats.setups_succeeded += outcome.succeeded
        self._stats.setups_failed += len(outcome.failures)
        if outcome.succeeded:
            OBSERVATION_SETUPS.labels(status="success").inc(outcome.succeeded)
        if outcome.failures:
            OBSERVATION_SETUPS.labels(status="failed").inc(len(outcome.failures))
        OBSERVATION_BATCHES.labels(status="completed" if outcome.ok else "partial").inc()

    def _forget(self, device_internal_id: str, batch: asyncio.Task) -> None:
        batches = self._pending.get(device_internal_id)
        if batches is None:
            return
        batches.discard(batch)
        if not batches:
            self._pending.pop(device_internal_id, None)
