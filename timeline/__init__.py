"""Pure timeline package.

Time-bound values, their URL codec, and the controller that drives timeline
dragging and playback. It must not import Django or perform any I/O.
"""

from .controller import DragHandle, TimelineController, TimelineManager
from .query_params import (
    EPOCH_DATE,
    format_time_bounds,
    format_time_uri_component,
    get_time_domain_from_query_string,
)
from .state import TimelineState
from .time_bounds import TimeBound, TimeBounds, TimeBoundValue, parse_time_bound

__all__ = [
    "DragHandle",
    "EPOCH_DATE",
    "TimeBound",
    "TimeBoundValue",
    "TimeBounds",
    "TimelineController",
    "TimelineManager",
    "TimelineState",
    "format_time_bounds",
    "format_time_uri_component",
    "get_time_domain_from_query_string",
    "parse_time_bound",
]
