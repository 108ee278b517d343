from __future__ import annotations

from fastapi import APIRouter, Response, status

from . import deps


router = APIRouter(tags=["system"])


@router.get("/livez", response_class=Response, summary="Liveness probe")
async def livez() -> Response:
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/readyz",
    response_class=Response,
    summary="Readiness probe",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "database unreachable"}},
)
async def readyz(store: deps.UserStoreDependency) -> Response:
    await store.ping()
    return Response(status_code=status.HTTP_200_OK)


__all__ = ["router"]
