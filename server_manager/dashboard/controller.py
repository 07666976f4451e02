"""
Dashboard controller: owns the current snapshot and drives the update flow.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .client import UpdateServiceClient, UpdateRequestError
from .models import DashboardState, initial_state
from .reducer import Action, UpdateFailed, UpdateStarted, UpdateSucceeded, reduce

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "Update failed. Please try again."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DashboardController:
    """
    Holds the dashboard state and runs one update at a time.

    The trigger is disabled (`can_trigger` is False) while a request is
    outstanding. This is a client-side affordance; the server enforces its own
    single-flight guard.
    """

    def __init__(self,
                 client: UpdateServiceClient,
                 state: Optional[DashboardState] = None,
                 clock: Callable[[], datetime] = _utcnow):
        self.client = client
        self.clock = clock
        self.state = state or initial_state(clock())

    @property
    def can_trigger(self) -> bool:
        return self.state.can_trigger

    def dispatch(self, action: Action) -> DashboardState:
        self.state = reduce(self.state, action)
        return self.state

    def trigger_update(self) -> DashboardState:
        """Run an update unless one is already outstanding; return the new state."""
        if not self.can_trigger:
            logger.debug("Update trigger ignored: request already outstanding")
            return self.state

        self.dispatch(UpdateStarted())
        try:
            self.client.trigger_update()
        except UpdateRequestError as e:
            logger.error(f"Update failed: {e.message}")
            return self.dispatch(UpdateFailed(e.message or RETRY_MESSAGE))
        except Exception as e:
            # The trigger must re-enable whatever the client raised
            logger.exception("Unexpected error while requesting update")
            return self.dispatch(UpdateFailed(str(e) or RETRY_MESSAGE))

        return self.dispatch(UpdateSucceeded(self.clock()))
