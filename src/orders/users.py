"""User directory port: answers whether a user exists before an order is placed.

The users service owns user records. ``AcceptAllUsers`` is the default and
trusts the already-authenticated principal; ``StaticUserDirectory`` serves
tests and local setups with a fixed set of known users.
"""

from abc import ABC, abstractmethod

_directory_instance = None


class UserDirectory(ABC):
    @abstractmethod
    def exists(self, user_id: str) -> bool: ...


class AcceptAllUsers(UserDirectory):
    def exists(self, user_id: str) -> bool:  # noqa: ARG002
        return True


class StaticUserDirectory(UserDirectory):
    def __init__(self, user_ids=()):
        self._user_ids = {str(user_id) for user_id in user_ids}

    def add(self, user_id: str) -> None:
        self._user_ids.add(str(user_id))

    def exists(self, user_id: str) -> bool:
        return str(user_id) in self._user_ids


def get_user_directory() -> UserDirectory:
    """Return the configured user directory (singleton), ``AcceptAllUsers`` by default."""
    global _directory_instance
    if _directory_instance is None:
        _directory_instance = AcceptAllUsers()
    return _directory_instance


def set_user_directory(directory: UserDirectory) -> None:
    global _directory_instance
    _directory_instance = directory


def reset_user_directory():
    """Reset the user directory singleton (useful for testing)."""
    global _directory_instance
    _directory_instance = None
