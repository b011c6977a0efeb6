"""Password hashing and password policy."""

from typing import List

from werkzeug.security import generate_password_hash, check_password_hash

from .exceptions import PasswordPolicyViolation

MIN_LENGTH = 6


def hash_password(password: str, method: str = 'scrypt') -> str:
    """Generate a salted hash of a password."""
    return generate_password_hash(password, method=method)


def check_password(password: str, encoded: str) -> bool:
    """Check a password against a hash. The comparison is constant-time."""
    try:
        return check_password_hash(encoded, password)
    except ValueError:      # Unknown or malformed hash method.
        return False


def policy_violations(password: str) -> List[str]:
    """List the ways in which ``password`` fails the password policy."""
    violations = []
    if len(password) < MIN_LENGTH:
        violations.append(
            f'Passwords must be at least {MIN_LENGTH} characters.'
        )
    if not any(c.isdigit() for c in password):
        violations.append("Passwords must have at least one digit ('0'-'9').")
    if not any(c.islower() for c in password):
        violations.append(
            "Passwords must have at least one lowercase ('a'-'z')."
        )
    if not any(c.isupper() for c in password):
        violations.append(
            "Passwords must have at least one uppercase ('A'-'Z')."
        )
    if all(c.isalnum() for c in password):
        violations.append(
            'Passwords must have at least one non alphanumeric character.'
        )
    return violations


def validate_password(password: str) -> None:
    """
    Enforce the password policy.

    Raises
    ------
    :class:`PasswordPolicyViolation`
        Raised with one message per failed rule.

    """
    violations = policy_violations(password)
    if violations:
        raise PasswordPolicyViolation('Password is too weak', violations)
