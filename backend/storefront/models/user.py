"""
User model for admin authentication.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Store operator account."""

    id: str
    username: str
    password_hash: str
    email: str | None = None
    is_admin: bool = False

    def __repr__(self) -> str:
        return f"<User {self.username}>"
