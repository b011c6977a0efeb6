"""Exceptions raised while issuing and checking bearer tokens."""


class InvalidToken(ValueError):
    """Token is malformed, forged, or from another issuer."""


class ExpiredToken(InvalidToken):
    """Token was valid, but its lifetime has passed."""


class SigningConfigurationError(RuntimeError):
    """The signing key or issuer is missing or unusable."""


class IdentityNotFound(RuntimeError):
    """The authenticated claims do not correspond to a known user."""
