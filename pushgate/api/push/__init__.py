"""Push API."""
from fastapi import APIRouter

from pushgate.api.push import routes_push

router = APIRouter()

router.include_router(routes_push.router, prefix="/send", tags=["push"])
