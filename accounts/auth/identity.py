"""Resolve the authenticated caller to a :class:`.User`."""

import logging
from typing import Any, Dict, Optional

from .. import domain
from ..services import users
from .exceptions import IdentityNotFound

logger = logging.getLogger(__name__)

IDENTITY_CLAIM = 'email'
"""The one claim used to look up the caller."""


def identity_from_claims(claims: Optional[Dict[str, Any]]) -> str:
    """
    Extract the identity claim from a verified claim set.

    Raises
    ------
    :class:`IdentityNotFound`
        If there are no claims, or the claim is absent or not a string.

    """
    if not claims:
        raise IdentityNotFound('No authenticated claims')
    value = claims.get(IDENTITY_CLAIM)
    if not isinstance(value, str) or not value.strip():
        raise IdentityNotFound(f'Claim {IDENTITY_CLAIM} missing or malformed')
    return value


def resolve(claims: Optional[Dict[str, Any]]) -> domain.User:
    """Get the user identified by ``claims``."""
    user = users.find_by_email(identity_from_claims(claims))
    if user is None:
        logger.debug('Token refers to a user that does not exist')
        raise IdentityNotFound('No such user')
    return user


def resolve_with_address(claims: Optional[Dict[str, Any]]) -> domain.User:
    """Get the user identified by ``claims``, with their address loaded."""
    user = users.find_by_email_with_address(identity_from_claims(claims))
    if user is None:
        logger.debug('Token refers to a user that does not exist')
        raise IdentityNotFound('No such user')
    return user
