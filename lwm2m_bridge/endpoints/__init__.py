from .health import create_health_router

__all__ = ["create_health_router"]
