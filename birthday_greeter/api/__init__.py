"""HTTP routing for the birthday greeter."""

from fastapi import APIRouter

from . import routes_hello, routes_system


def get_api_router() -> APIRouter:
    router = APIRouter()
    router.include_router(routes_system.router)
    router.include_router(routes_hello.router)
    return router


__all__ = ["get_api_router"]
