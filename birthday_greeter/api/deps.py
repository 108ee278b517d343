from __future__ import annotations

from datetime import datetime
from typing import Annotated, Callable

from fastapi import Depends, Request

from birthday_greeter.services.user_store import UserStore

Clock = Callable[[], datetime]


def get_user_store(request: Request) -> UserStore:
    store = getattr(request.app.state, "user_store", None)
    if not isinstance(store, UserStore):  # pragma: no cover - lifespan always sets it
        raise RuntimeError("user_store_not_configured")
    return store


def get_clock(request: Request) -> Clock:
    clock: Clock = request.app.state.clock
    return clock


UserStoreDependency = Annotated[UserStore, Depends(get_user_store)]
ClockDependency = Annotated[Clock, Depends(get_clock)]


__all__ = [
    "Clock",
    "get_user_store",
    "get_clock",
    "UserStoreDependency",
    "ClockDependency",
]
