"""API dependencies."""
from fastapi import HTTPException, Request, status

from pushgate.services.push_service import PushService


def get_push_service(request: Request) -> PushService:
    """Push service built at startup and stored on app.state."""
    service = getattr(request.app.state, "push_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="FCM client is not initialised",
        )
    return service
