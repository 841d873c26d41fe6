from .logging_utils import (
    get_trace_id,
    init_logging,
    log_event,
    log_provider_failure,
    log_warning,
)

__all__ = [
    "get_trace_id",
    "init_logging",
    "log_event",
    "log_provider_failure",
    "log_warning",
]
