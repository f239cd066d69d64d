"""Signal routing: dispatcher and sinks for progress signals."""

from buildinfo.routing.dispatcher import DispatchReport, SignalDispatcher
from buildinfo.routing.sinks import ProgressSink
from buildinfo.routing.sinks.log import LoggingSink
from buildinfo.routing.sinks.memory import CallbackSink, MemorySink

__all__ = [
    "SignalDispatcher",
    "DispatchReport",
    "ProgressSink",
    "MemorySink",
    "CallbackSink",
    "LoggingSink",
]
