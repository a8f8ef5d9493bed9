"""In-memory user storage keyed by e-mail address."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    """A registered user."""

    name: str
    email: str


class UserNotFoundError(LookupError):
    """Raised when no user is stored under the requested e-mail."""


class UserExistsError(ValueError):
    """Raised when a user with the same e-mail is already stored."""


@dataclass
class UserStore:
    """Users held in memory, one per e-mail address."""

    data: dict[str, User] = field(default_factory=dict)

    def load(self, email: str) -> User:
        """Return the user stored under *email*."""
        try:
            return self.data[email]
        except KeyError:
            raise UserNotFoundError("not find user") from None

    def save(self, name: str, email: str) -> User:
        """Store a new user; the e-mail must not be taken yet."""
        if email in self.data:
            raise UserExistsError("this user already exists")
        user = User(name=name, email=email)
        self.data[email] = user
        return user

    def delete(self, email: str) -> User:
        """Remove and return the user stored under *email*."""
        user = self.load(email)
        del self.data[email]
        return user

    def __contains__(self, email: object) -> bool:
        return email in self.data

    def __len__(self) -> int:
        return len(self.data)