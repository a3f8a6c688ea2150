# recruitdesk/db/deps.py
from fastapi import Request
from typing import TYPE_CHECKING

# Note: No import from main.py here!

if TYPE_CHECKING:
    from recruitdesk.services.v1 import ServiceContainer


def get_services(request: Request) -> "ServiceContainer":
    """
    Service container dependency.
    Pulls the services from app.state to support multiple app instances.
    """
    services = getattr(request.app.state, "services", None)

    if services is None:
        # This handles cases where the dependency is called but lifespan didn't run
        raise RuntimeError(
            "Services not found in app.state. Ensure lifespan is configured."
        )

    return services


__all__ = ["get_services"]
