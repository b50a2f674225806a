"""Actor context - the caller an operation runs on behalf of."""

from dataclasses import dataclass

ANONYMOUS_ACTOR_ID = "anonymous"


@dataclass(frozen=True)
class ActorContext:
    """Resolved caller identity, passed explicitly into every registry call."""

    actor_id: str
    username: str | None = None
    email: str | None = None
    roles: tuple[str, ...] = ()

    @property
    def is_anonymous(self) -> bool:
        return self.actor_id == ANONYMOUS_ACTOR_ID

    @classmethod
    def anonymous(cls) -> "ActorContext":
        return cls(actor_id=ANONYMOUS_ACTOR_ID)
