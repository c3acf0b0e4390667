"""Core module - domain model and monitoring for the LWM2M observation core.

Structure:
- domain/      → devices, resource addresses, contracts, errors
- monitoring/  → stats and Prometheus metrics
"""
