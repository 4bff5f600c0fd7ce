"""Application email – Message, Part and Attachment value objects."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

from mailgate.kernel.errors import ValidationError
from mailgate.kernel.types import Address

__all__ = ["Attachment", "Message", "Part", "PartType", "require_template", "template_var_sets"]

_DEFAULT_CONTENT_TYPE = "application/octet-stream"


class PartType(str, Enum):
    TEXT = "text"
    HTML = "html"


@dataclass(frozen=True)
class Part:
    """A single body fragment (plain text or HTML)."""

    content_type: PartType
    content: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "content_type", PartType(self.content_type))
        if isinstance(self.content, str):
            object.__setattr__(self, "content", self.content.encode("utf-8"))

    @classmethod
    def text(cls, content: str) -> "Part":
        return cls(PartType.TEXT, content.encode("utf-8"))

    @classmethod
    def html(cls, content: str) -> "Part":
        return cls(PartType.HTML, content.encode("utf-8"))

    def decoded(self) -> str:
        return self.content.decode("utf-8")


@dataclass(frozen=True)
class Attachment:
    """A file attachment; ``content`` is held by reference, never copied."""

    filename: str
    content: bytes
    content_type_override: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def content_type(self) -> str:
        """Declared type, else guessed from the filename extension."""
        if self.content_type_override:
            return self.content_type_override
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or _DEFAULT_CONTENT_TYPE

    def validate(self) -> None:
        if not self.filename or not self.filename.strip():
            raise ValidationError.for_field("filename", "Attachment filename must not be empty")

    def __repr__(self) -> str:  # pragma: no cover
        return f"Attachment(filename={self.filename!r}, content_type={self.content_type!r}, size={self.size})"


@dataclass(frozen=True)
class Message:
    """A provider-agnostic email, immutable once constructed.

    Recipients and the sender may be given as :class:`Address` instances or
    as ``"a@b.io"`` / ``"Name <a@b.io>"`` strings.  Construction enforces:

    * ``to`` holds at least one address;
    * every address is syntactically valid;
    * ``template_vars`` is empty unless ``template_id`` is set.

    Any violation raises :class:`~mailgate.kernel.errors.ValidationError`
    listing every failing field.
    """

    sender: Address
    to: tuple[Address, ...]
    subject: str = ""
    parts: tuple[Part, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    template_id: str | None = None
    template_vars: Mapping[str, str] = field(default_factory=dict)
    reply_to: Address | None = None
    channel: str | None = None

    def __post_init__(self) -> None:
        errors: list[dict[str, Any]] = []

        sender = _coerce_address(self.sender, "sender", errors)
        raw_to = _as_sequence(self.to)
        to = tuple(
            addr
            for i, raw in enumerate(raw_to)
            if (addr := _coerce_address(raw, f"to[{i}]", errors)) is not None
        )
        reply_to = (
            _coerce_address(self.reply_to, "reply_to", errors)
            if self.reply_to is not None
            else None
        )
        if not raw_to:
            errors.append({"field": "to", "message": "At least one recipient is required"})
        if self.template_vars and not self.template_id:
            errors.append({
                "field": "template_vars",
                "message": "template_vars given but no template_id is set",
            })
        if errors:
            raise ValidationError("Invalid message", errors=errors)

        object.__setattr__(self, "sender", sender)
        object.__setattr__(self, "to", to)
        object.__setattr__(self, "reply_to", reply_to)
        object.__setattr__(self, "parts", tuple(self.parts))
        object.__setattr__(self, "attachments", tuple(self.attachments))
        object.__setattr__(self, "template_vars", {str(k): str(v) for k, v in (self.template_vars or {}).items()})

    def validate(self) -> None:
        """Re-check invariants; raises :class:`ValidationError` on failure."""
        if not self.to:
            raise ValidationError.for_field("to", "At least one recipient is required")
        if self.template_vars and not self.template_id:
            raise ValidationError.for_field("template_vars", "template_vars given but no template_id is set")
        for attachment in self.attachments:
            attachment.validate()

    @property
    def is_template(self) -> bool:
        return bool(self.template_id)

    @property
    def text_body(self) -> str | None:
        return self._first_part(PartType.TEXT)

    @property
    def html_body(self) -> str | None:
        return self._first_part(PartType.HTML)

    def _first_part(self, kind: PartType) -> str | None:
        for part in self.parts:
            if part.content_type is kind:
                return part.decoded()
        return None


def _as_sequence(value: Any) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, Address)):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(value)
    return (value,)


def _coerce_address(value: Any, field_name: str, errors: list[dict[str, Any]]) -> Address | None:
    try:
        return Address.parse(value)
    except ValidationError as exc:
        errors.append({"field": field_name, "message": exc.message})
        return None


def require_template(message: Message) -> str:
    """Return the template id of *message* or raise ``ValidationError("missing template")``."""
    if not message.template_id:
        raise ValidationError(
            "missing template",
            errors=[{
                "field": "template_id",
                "message": "Sending a template email requires a template_id",
            }],
        )
    return message.template_id


def template_var_sets(message: Message) -> list[dict[str, str]]:
    """Wrap the variables in a one-element list (providers expect one set per batch item)."""
    return [dict(message.template_vars)]
