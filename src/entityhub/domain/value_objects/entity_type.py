"""Closed type enumerations that partition entities into scopes."""

from enum import StrEnum
from typing import TypeVar

from entityhub.domain.exceptions import ValidationError

E = TypeVar("E", bound=StrEnum)


class IconType(StrEnum):
    """Icons live in a single scope."""

    ICON = "icon"


class RoleType(StrEnum):
    """Kinds of roles; each kind is its own slug and listing scope."""

    PLATFORM = "platform"
    ORGANIZATION = "organization"
    PROJECT = "project"


def parse_entity_type(token: str | None, enum_cls: type[E], label: str = "type") -> E:
    """Validate a raw type token against a closed enumeration.

    Matching is case-insensitive on the member value. Surrounding whitespace
    is ignored.

    Raises:
        ValidationError: token is missing or not a member of ``enum_cls``.
    """
    value = (token or "").strip().lower()
    try:
        return enum_cls(value)
    except ValueError:
        expected = ", ".join(m.value for m in enum_cls)
        raise ValidationError(
            f"Invalid {label} '{token}'. Expected one of: {expected}"
        ) from None
