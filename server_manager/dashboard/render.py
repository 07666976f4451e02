"""
Plain-text rendering of the dashboard snapshot.
"""
from typing import List

from .models import DashboardState, ServiceStatus

STATUS_MARKERS = {
    ServiceStatus.RUNNING: "[ OK ]",
    ServiceStatus.WARNING: "[WARN]",
    ServiceStatus.STOPPED: "[STOP]",
}


def render(state: DashboardState) -> str:
    """Render `state` as the Server Status panel."""
    button = "Update System" if state.can_trigger else "Updating..."
    lines: List[str] = [f"Server Status{' ' * 8}<{button}>", ""]

    if state.update_error:
        lines.append(f"! {state.update_error}")
        lines.append("")

    for service in state.services:
        stamp = service.last_updated.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        lines.append(f"{STATUS_MARKERS[service.status]} {service.name:<12} Last Updated {stamp}")
        if service.url:
            lines.append(f"       {service.url}")

    return "\n".join(lines)
