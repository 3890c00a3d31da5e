"""Structured event logging for mathconv.

Provides the event schema, a filesystem NDJSON sink, and safe emit
helpers that never raise.
"""

from mathconv.logging.events import (
    EventLevel,
    EventType,
    MathconvEvent,
    clear_sink,
    emit,
    emit_error,
    emit_info,
    emit_warning,
    set_project_dir,
    truncate_context,
)
from mathconv.logging.sink import EventSink

__all__ = [
    "EventLevel",
    "EventSink",
    "EventType",
    "MathconvEvent",
    "clear_sink",
    "emit",
    "emit_error",
    "emit_info",
    "emit_warning",
    "set_project_dir",
    "truncate_context",
]
