"""
Dashboard data model: service descriptors and the immutable view snapshot.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple


class ServiceStatus(str, Enum):
    """Displayed state of a service"""
    RUNNING = "running"
    WARNING = "warning"
    STOPPED = "stopped"


@dataclass(frozen=True)
class ServiceDescriptor:
    """A service shown on the dashboard. Never persisted."""
    name: str
    status: ServiceStatus
    last_updated: datetime
    url: Optional[str] = None


@dataclass(frozen=True)
class DashboardState:
    """Snapshot passed to the renderer; replaced, never mutated."""
    services: Tuple[ServiceDescriptor, ...]
    is_updating: bool = False
    update_error: Optional[str] = None

    @property
    def can_trigger(self) -> bool:
        return not self.is_updating


def default_services(now: Optional[datetime] = None) -> Tuple[ServiceDescriptor, ...]:
    """The fixed set of monitored services, all stamped with `now`."""
    now = now or datetime.now(timezone.utc)
    return (
        ServiceDescriptor("Nginx", ServiceStatus.RUNNING, now, "https://isp-pybox.gvec.net"),
        ServiceDescriptor("Docker", ServiceStatus.RUNNING, now),
        ServiceDescriptor("Prometheus", ServiceStatus.RUNNING, now, "https://prometheus.isp-pybox.gvec.net"),
        ServiceDescriptor("Grafana", ServiceStatus.RUNNING, now, "https://grafana.isp-pybox.gvec.net"),
    )


def initial_state(now: Optional[datetime] = None) -> DashboardState:
    return DashboardState(services=default_services(now))
