from __future__ import annotations

from fastapi import APIRouter, Request, Response, status
from pydantic import ValidationError

from birthday_greeter.core.errors import DateNotInPastError, InvalidPayloadError, InvalidUsernameError
from birthday_greeter.core.logging import get_logger
from birthday_greeter.domain import greeting, is_before_today, is_valid_username, parse_date

from . import deps, schemas

logger = get_logger(component="hello_api")

router = APIRouter(prefix="/hello", tags=["hello"])


async def _read_payload(request: Request) -> schemas.BirthdatePayload:
    body = await request.body()
    if body.strip() == b"null":
        return schemas.BirthdatePayload()
    try:
        return schemas.BirthdatePayload.model_validate_json(body)
    except ValidationError as exc:
        raise InvalidPayloadError() from exc


@router.put(
    "/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Save or replace a user's date of birth",
)
async def put_birthdate(
    username: str,
    request: Request,
    store: deps.UserStoreDependency,
    clock: deps.ClockDependency,
) -> Response:
    if not is_valid_username(username):
        raise InvalidUsernameError()

    payload = await _read_payload(request)
    birthdate = parse_date(payload.date_of_birth or "")
    if not is_before_today(birthdate, clock()):
        raise DateNotInPastError()

    await store.upsert(username, birthdate)
    logger.info("birthdate_saved", username=username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{username}", response_model=schemas.GreetingResponse, summary="Greet a user with their birthday countdown")
async def get_greeting(
    username: str,
    store: deps.UserStoreDependency,
    clock: deps.ClockDependency,
) -> schemas.GreetingResponse:
    birthdate = await store.lookup(username)
    return schemas.GreetingResponse(message=greeting(username, birthdate, clock()))


__all__ = ["router"]
