from .registration import ActiveAttributeObserver, create_active_attribute_observer

__all__ = ["ActiveAttributeObserver", "create_active_attribute_observer"]
