"""Adapter for callback-style observation engines.

LWM2M server libraries usually expose
``observe(device_id, object_id, instance_id, resource_id, on_report, on_setup_complete)``
and invoke both callbacks from their own network thread. The adapter turns
that into the awaitable IResourceObservationService contract.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

from ..core.domain.contracts import IResourceObservationService, ReportHandler
from ..core.domain.errors import Lwm2mBridgeError
from ..core.domain.resource_address import ResourceAddress

logger = logging.getLogger(__name__)


class CallbackObservationEngine(Protocol):
    def observe(
        self,
        device_id: str,
        object_id: int,
        instance_id: Optional[int],
        resource_id: int,
        on_report: Any,
        on_setup_complete: Any,
    ) -> None: ...


class CallbackObservationAdapter(IResourceObservationService):
    """Awaitable facade over a callback-style observation engine."""

    def __init__(self, engine: CallbackObservationEngine, setup_timeout: float = 30.0):
        self._engine = engine
        self._setup_timeout = setup_timeout

    async def observe(
        self,
        device_internal_id: str,
        address: ResourceAddress,
        on_report: ReportHandler,
    ) -> Optional[Any]:
        loop = asyncio.get_running_loop()
        setup: asyncio.Future = loop.create_future()

        def _settle(error: Any, value: Any) -> None:
            if setup.done():
                return
            if error:
                if not isinstance(error, BaseException):
                    error = Lwm2mBridgeError(f"observation engine error: {error}")
                setup.set_exception(error)
            else:
                setup.set_result(value)

        def _on_setup_complete(error: Any = None, value: Any = None) -> None:
            loop.call_soon_threadsafe(_settle, error, value)

        def _on_report(value: Any) -> None:
            try:
                asyncio.run_coroutine_threadsafe(on_report(value), loop)
            except RuntimeError:
                logger.warning(
                    "[ADAPTER] Report from device=%s %s dropped: event loop closed",
                    device_internal_id,
                    address,
                )

        self._engine.observe(
            device_internal_id,
            address.object_id,
            address.instance_id,
            address.resource_id,
            _on_report,
            _on_setup_complete,
        )

        if self._setup_timeout > 0:
            return await asyncio.wait_for(setup, timeout=self._setup_timeout)
        return await setup
