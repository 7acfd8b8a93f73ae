"""Domain entity representing a reservation notification."""

from __future__ import annotations

from dataclasses import dataclass

# Largest value a signed 64-bit identifier column can hold.
MAX_IDENTIFIER = 2**63 - 1


def login_key(login: str | None) -> str:
    """Return the case-insensitive form of ``login`` used to scope ownership."""

    return (login or "").strip().casefold()


@dataclass
class Notification:
    """Message addressed to the user identified by ``user_login``."""

    id: int | None
    message: str
    user_login: str
    reservation_id: int | None = None
    deleted: bool = False
    read: bool = False

    def is_active(self) -> bool:
        """Return ``True`` when the notification has not been soft deleted."""

        return not self.deleted

    def belongs_to(self, login: str | None) -> bool:
        """Return ``True`` when ``login`` designates the owner, ignoring case."""

        if not login or not login.strip():
            return False
        return login_key(self.user_login) == login_key(login)


__all__ = ["MAX_IDENTIFIER", "Notification", "login_key"]
