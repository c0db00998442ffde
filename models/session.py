from dataclasses import dataclass
from typing import Optional

from models.flat import FlatId


@dataclass(frozen=True)
class Identity:
    """Acting role supplied by the identity provider."""
    role: str                          # "admin", "owner", "anonymous"
    flat_id: Optional[FlatId] = None   # bound flat for owners

    @classmethod
    def admin(cls) -> "Identity":
        return cls("admin")

    @classmethod
    def owner(cls, flat_id: FlatId) -> "Identity":
        return cls("owner", flat_id)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_owner(self) -> bool:
        return self.role == "owner" and self.flat_id is not None


ANONYMOUS = Identity("anonymous")
