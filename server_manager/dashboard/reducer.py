"""
Reducer for dashboard state transitions.

Every transition returns a new DashboardState; the input is left untouched.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Union

from .models import DashboardState, ServiceDescriptor

_TICK = timedelta(microseconds=1)


@dataclass(frozen=True)
class UpdateStarted:
    pass


@dataclass(frozen=True)
class UpdateSucceeded:
    at: datetime


@dataclass(frozen=True)
class UpdateFailed:
    message: str


Action = Union[UpdateStarted, UpdateSucceeded, UpdateFailed]


def _restamp(service: ServiceDescriptor, at: datetime) -> ServiceDescriptor:
    # last_updated must move forward even if the clock did not
    stamp = at if at > service.last_updated else service.last_updated + _TICK
    return replace(service, last_updated=stamp)


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Apply `action` to `state` and return the next state."""
    if isinstance(action, UpdateStarted):
        return replace(state, is_updating=True, update_error=None)

    if isinstance(action, UpdateSucceeded):
        return replace(
            state,
            services=tuple(_restamp(s, action.at) for s in state.services),
            is_updating=False,
            update_error=None,
        )

    if isinstance(action, UpdateFailed):
        return replace(state, is_updating=False, update_error=action.message)

    raise TypeError(f"Unknown dashboard action: {action!r}")
