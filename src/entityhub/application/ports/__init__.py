"""Application ports - interfaces for external adapters."""

from entityhub.application.ports.conflict_translator import ConflictTranslator
from entityhub.application.ports.repositories import EntityRepository
from entityhub.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "ConflictTranslator",
    "EntityRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
