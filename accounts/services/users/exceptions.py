"""Exceptions raised by the users datastore."""

from typing import List, Optional


class NoSuchUser(RuntimeError):
    """User does not exist."""


class AuthenticationFailed(RuntimeError):
    """Failed to authenticate user with provided credentials."""


class EmailAlreadyInUse(RuntimeError):
    """An account with this e-mail address already exists."""


class RegistrationFailed(RuntimeError):
    """The datastore refused to create the account."""

    def __init__(self, message: str,
                 errors: Optional[List[str]] = None) -> None:
        super(RegistrationFailed, self).__init__(message)
        self.errors = errors or []


class PasswordPolicyViolation(RegistrationFailed):
    """Password does not satisfy the password policy."""


class PersistenceFailed(RuntimeError):
    """A write to the datastore failed and was rolled back."""


class Unavailable(RuntimeError):
    """The datastore cannot be reached."""
