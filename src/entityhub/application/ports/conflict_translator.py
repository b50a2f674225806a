"""Conflict translator port - storage uniqueness errors to domain Conflict."""

from typing import Protocol

from entityhub.domain.exceptions import Conflict


class ConflictTranslator(Protocol):
    """Port for recognizing unique-constraint violations raised by a store."""

    def translate(self, error: BaseException, label: str) -> Conflict | None: ...
