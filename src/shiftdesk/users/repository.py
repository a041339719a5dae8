from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Read-only port onto the user directory.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    async def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    async def list_all(self) -> Sequence[User]:
        raise NotImplementedError
