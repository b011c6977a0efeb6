"""Provides tools for working with bearer-token authentication."""

import logging
from typing import Optional

from flask import Flask, request

from . import tokens
from .exceptions import ExpiredToken, InvalidToken
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)


class Auth(object):
    """
    Attaches verified token claims to the request.

    Intended for use in a Flask application factory, for example:

    .. code-block:: python

       from flask import Flask
       from accounts.auth import Auth


       def create_web_app() -> Flask:
           app = Flask('accounts')
           app.config.from_pyfile('config.py')
           Auth(app)
           return app

    Building the :class:`.TokenIssuer` here means that a missing or unusable
    signing key stops the application from starting.
    """

    def __init__(self, app: Optional[Flask] = None) -> None:
        """Initialize ``app``, if provided."""
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Configure the token issuer and attach :meth:`.load_token`."""
        self.app = app
        TokenIssuer.init_app(app)
        self.app.before_request(self.load_token)

    def load_token(self) -> None:
        """
        Look for a bearer token, and attach its claims to the request.

        ``request.auth`` is ``None`` when there is no token, or when the token
        cannot be verified. Routes that require authentication are guarded by
        :func:`.decorators.authenticated`.
        """
        request.auth = None
        token = self._get_bearer_token()
        if token is None:
            return None
        try:
            request.auth = tokens.verify(token)
        except ExpiredToken:
            logger.debug('Auth token has expired')
        except InvalidToken as e:
            logger.info('Auth token not valid: %s', e)
        return None

    def _get_bearer_token(self) -> Optional[str]:
        header = request.headers.get('Authorization')
        if not header:
            return None
        parts = header.split()
        if len(parts) != 2 or parts[0].lower() != 'bearer':
            logger.debug('Authorization header is not a bearer token')
            return None
        return parts[1]
