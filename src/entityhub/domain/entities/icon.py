"""Icon entity."""

from dataclasses import dataclass

from entityhub.domain.entities.entity import Entity
from entityhub.domain.value_objects import IconType


@dataclass
class Icon(Entity):
    """Icon - a named glyph selectable across the platform."""

    type: IconType
