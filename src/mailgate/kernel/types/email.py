"""Email address value object."""

from __future__ import annotations

import dataclasses
import re
from typing import Final

from mailgate.kernel.errors.domain import ValidationError

_EMAIL_PATTERN: Final = re.compile(
    r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$"
)
_NAMED_PATTERN: Final = re.compile(r"^\s*(?P<name>.*?)\s*<(?P<email>[^<>]+)>\s*$")


@dataclasses.dataclass(frozen=True, slots=True)
class Address:
    """Mailbox address with an optional display name (email normalised to lowercase)."""

    email: str
    display_name: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.email, str) or not self.email.strip():
            raise ValidationError.for_field("email", "Email address must not be empty")
        normalised = self.email.lower().strip()
        object.__setattr__(self, "email", normalised)
        if not _EMAIL_PATTERN.match(normalised):
            raise ValidationError.for_field("email", f"Invalid email address: {self.email!r}")
        if self.display_name is not None:
            name = self.display_name.strip().strip('"')
            object.__setattr__(self, "display_name", name or None)

    def __str__(self) -> str:
        if self.display_name:
            return f"{self.display_name} <{self.email}>"
        return self.email

    @property
    def domain(self) -> str:
        """Return the domain portion of the address (everything after ``@``)."""
        return self.email.split("@", 1)[1]

    @classmethod
    def parse(cls, value: "str | Address") -> "Address":
        """Build an address from ``"a@b.io"`` or ``"Name <a@b.io>"``."""
        if isinstance(value, Address):
            return value
        if not isinstance(value, str):
            raise ValidationError.for_field("email", f"Cannot parse address from {type(value).__name__}")
        match = _NAMED_PATTERN.match(value)
        if match:
            return cls(match.group("email"), match.group("name") or None)
        return cls(value)


__all__ = ["Address"]
