"""Functions for issuing and verifying bearer tokens."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from flask import Flask, current_app

from .. import domain
from .exceptions import ExpiredToken, InvalidToken, SigningConfigurationError

logger = logging.getLogger(__name__)

MIN_KEY_BYTES = {'HS256': 32, 'HS384': 48, 'HS512': 64}
"""Shortest acceptable key for each supported algorithm."""

EXTENSION = 'token_issuer'


class TokenIssuer(object):
    """
    Signs and verifies JWTs that carry a user's identity claims.

    Configuration is fixed at construction; an instance is built once per
    application by :meth:`init_app`.
    """

    def __init__(self, issuer: str, key: str, expiry: int = 604800,
                 algorithm: str = 'HS512',
                 audience: Optional[str] = None) -> None:
        """
        Check and store the signing configuration.

        Raises
        ------
        :class:`SigningConfigurationError`
            If the key is missing or too short for ``algorithm``, the issuer
            is empty, or the algorithm is not supported.

        """
        if algorithm not in MIN_KEY_BYTES:
            raise SigningConfigurationError(
                f'Unsupported signing algorithm: {algorithm}'
            )
        if not key:
            raise SigningConfigurationError('Signing key is not set')
        if len(key.encode('utf-8')) < MIN_KEY_BYTES[algorithm]:
            raise SigningConfigurationError(
                f'Signing key must be at least {MIN_KEY_BYTES[algorithm]}'
                f' bytes for {algorithm}'
            )
        if not issuer:
            raise SigningConfigurationError('Token issuer is not set')
        if expiry <= 0:
            raise SigningConfigurationError('Token expiry must be positive')
        self._issuer = issuer
        self._key = key
        self._expiry = timedelta(seconds=expiry)
        self._algorithm = algorithm
        self._audience = audience or None

    def issue(self, user: domain.User) -> str:
        """Encode the identity claims of ``user`` as a signed JWT."""
        now = datetime.now(tz=timezone.utc)
        claims: Dict[str, Any] = {
            'sub': user.email,
            'email': user.email,
            'given_name': user.display_name,
            'iat': now,
            'nbf': now,
            'exp': now + self._expiry,
            'iss': self._issuer
        }
        if self._audience:
            claims['aud'] = self._audience
        return jwt.encode(claims, self._key, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify the signature, issuer and lifetime of a token.

        The audience is only checked when one is configured.

        Returns
        -------
        dict
            The verified claims.

        Raises
        ------
        :class:`ExpiredToken`
        :class:`InvalidToken`

        """
        options = {
            'require': ['exp', 'iat', 'iss', 'sub'],
            'verify_aud': self._audience is not None
        }
        try:
            claims: Dict[str, Any] = jwt.decode(
                token, self._key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                audience=self._audience,
                options=options
            )
        except jwt.exceptions.ExpiredSignatureError as e:
            raise ExpiredToken('Token has expired') from e
        except jwt.exceptions.InvalidTokenError as e:
            raise InvalidToken(f'Not a valid token: {e}') from e
        return claims

    @classmethod
    def init_app(cls, app: Flask) -> None:
        """Build the issuer from ``app.config`` and attach it to ``app``."""
        app.config.setdefault('TOKEN_ALGORITHM', 'HS512')
        app.config.setdefault('TOKEN_EXPIRY', 604800)
        app.config.setdefault('TOKEN_AUDIENCE', None)
        app.extensions[EXTENSION] = cls(
            issuer=app.config.get('TOKEN_ISSUER', ''),
            key=app.config.get('JWT_SECRET', ''),
            expiry=int(app.config['TOKEN_EXPIRY']),
            algorithm=app.config['TOKEN_ALGORITHM'],
            audience=app.config['TOKEN_AUDIENCE']
        )
        logger.debug('Token issuer configured for %s',
                     app.config.get('TOKEN_ISSUER'))


def current_issuer() -> TokenIssuer:
    """Get the :class:`.TokenIssuer` of the current application."""
    try:
        issuer: TokenIssuer = current_app.extensions[EXTENSION]
    except KeyError as e:
        raise SigningConfigurationError('Token issuer not initialized') from e
    return issuer


def issue(user: domain.User) -> str:
    """Issue a fresh token for ``user``."""
    return current_issuer().issue(user)


def verify(token: str) -> Dict[str, Any]:
    """Verify a token and return its claims."""
    return current_issuer().verify(token)
