"""Explicit actor model passed through every feedback operation."""

from dataclasses import dataclass

from src.database.models.users import User


@dataclass(frozen=True)
class Actor:
    """The identity performing a request, possibly anonymous."""

    user: User | None = None

    @classmethod
    def anonymous(cls) -> "Actor":
        return cls(user=None)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def id(self) -> int | None:
        return self.user.id if self.user else None

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.admin)
