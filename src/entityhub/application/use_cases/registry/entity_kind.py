"""Entity kind descriptors - what the generic registry is parameterized by."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from entityhub.application.ports import EntityRepository, UnitOfWork
from entityhub.domain.entities import Entity, Icon, Role
from entityhub.domain.value_objects import IconType, RoleType


@dataclass(frozen=True)
class EntityKind:
    """Describes one registry-managed resource."""

    label: str
    entity_cls: type[Entity]
    type_enum: type[StrEnum]
    repository: Callable[[UnitOfWork], EntityRepository]
    extra_fields: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        """Lower-case label for log lines and messages."""
        return self.label.lower()


ICON_KIND = EntityKind(
    label="Icon",
    entity_cls=Icon,
    type_enum=IconType,
    repository=lambda uow: uow.icons,
)

ROLE_KIND = EntityKind(
    label="Role",
    entity_cls=Role,
    type_enum=RoleType,
    repository=lambda uow: uow.roles,
    extra_fields=("description",),
)
