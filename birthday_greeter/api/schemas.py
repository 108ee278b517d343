from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class BirthdatePayload(BaseModel):
    date_of_birth: Optional[str] = Field(
        default=None,
        alias="dateOfBirth",
        json_schema_extra={"example": "1990-05-20"},
        description="Calendar date in YYYY-MM-DD form.",
    )


class GreetingResponse(BaseModel):
    message: str = Field(..., json_schema_extra={"example": "Hello, Alice! Your birthday is in 12 day(s)"})


__all__ = ["BirthdatePayload", "GreetingResponse"]
