"""Client view feature module: schedule, time tracking and metrics context."""

from client_portal.features.client_view.context import (
    ClientDashboardContext,
    build_client_context,
    build_schedule,
)

__all__ = [
    "ClientDashboardContext",
    "build_client_context",
    "build_schedule",
]
