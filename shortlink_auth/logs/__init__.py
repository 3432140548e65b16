from shortlink_auth.logs.log_setup import CompactJsonFormatter, TaskNameFilter, log_setup

__all__ = [
    "CompactJsonFormatter",
    "TaskNameFilter",
    "log_setup",
]
