from .update_runner import (
    UpdateError,
    UpdateInProgressError,
    UpdateOutput,
    UpdateRun,
    UpdateRunner,
)

__all__ = [
    "UpdateError",
    "UpdateInProgressError",
    "UpdateOutput",
    "UpdateRun",
    "UpdateRunner",
]
