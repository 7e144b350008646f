from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Person:
    id: str
    name: str

    def __str__(self) -> str:
        """Return a compact human-readable summary."""
        return f"Person #{self.id} ({self.name})"


@dataclass(frozen=True)
class GreetingViewData:
    name: str


@dataclass(frozen=True)
class LoginViewData:
    error: Optional[str] = None
    name_value: str = ""


@dataclass(frozen=True)
class LogoutViewData:
    pass


@dataclass(frozen=True)
class TimeViewData:
    local_time: str
    utc_time: str
    name: str = ""


@dataclass(frozen=True)
class ErrorViewData:
    status: int
    message: str = ""


ViewData = (
    GreetingViewData | LoginViewData | LogoutViewData | TimeViewData | ErrorViewData
)
