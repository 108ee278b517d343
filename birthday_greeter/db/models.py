from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Text
from sqlalchemy.orm import Mapped, mapped_column

from birthday_greeter.core.db import Base


class User(Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(Text, primary_key=True)
    birthdate: Mapped[date] = mapped_column(Date, nullable=False)


__all__ = ["User"]
