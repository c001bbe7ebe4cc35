"""
Audit logging and run recording.
"""

from .event_emitter import EventEmitter, LogEntry
from .run_recorder import RunRecorder

__all__ = ['EventEmitter', 'LogEntry', 'RunRecorder']
