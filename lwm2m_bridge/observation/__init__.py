"""Observation orchestration.

Structure:
- object_list.py: advertised object list parsing
- builder.py: work list construction
- scheduler.py: delayed concurrent execution
- relay.py: observed value → context update
- adapters.py: callback-style engine adapter
"""

from .adapters import CallbackObservationAdapter
from .builder import ObservationListBuilder
from .config import ObservationConfig
from .object_list import parse_object_uri_list
from .relay import UpdateRelay
from .scheduler import ObservationScheduler
from .tasks import BatchOutcome, ObservationTask

__all__ = [
    "BatchOutcome",
    "CallbackObservationAdapter",
    "ObservationConfig",
    "ObservationListBuilder",
    "ObservationScheduler",
    "ObservationTask",
    "UpdateRelay",
    "parse_object_uri_list",
]
