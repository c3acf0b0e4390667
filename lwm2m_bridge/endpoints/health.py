"""Health and observation statistics endpoints."""

from fastapi import APIRouter

from ..handlers.registration import ActiveAttributeObserver


def create_health_router(observer: ActiveAttributeObserver) -> APIRouter:
    router = APIRouter(tags=["health"])

    @router.get("/health")
    def health():
        """Liveness probe: ok while the process is running."""
        return {"status": "ok"}

    @router.get("/health/observations")
    def observations():
        """Observation counters plus batches waiting on their delay."""
        stats = observer.stats.to_dict()
        stats["pending_batches"] = observer.scheduler.pending_count()
        return stats

    return router
