"""Status dashboard: snapshot, reducer, Update Service client and renderer."""

from .client import UpdateRequestError, UpdateServiceClient
from .controller import DashboardController
from .models import DashboardState, ServiceDescriptor, ServiceStatus, default_services, initial_state
from .reducer import UpdateFailed, UpdateStarted, UpdateSucceeded, reduce
from .render import render

__all__ = [
    "DashboardController",
    "DashboardState",
    "ServiceDescriptor",
    "ServiceStatus",
    "UpdateFailed",
    "UpdateRequestError",
    "UpdateServiceClient",
    "UpdateStarted",
    "UpdateSucceeded",
    "default_services",
    "initial_state",
    "reduce",
    "render",
]
