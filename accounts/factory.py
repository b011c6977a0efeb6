"""Application factory for accounts app."""

import logging
from typing import Any, Dict, Optional

from flask import Flask

from accounts import auth, errors
from accounts.routes import api
from accounts.services import users


def create_web_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Initialize and configure the accounts application.

    Parameters
    ----------
    config : dict
        Overrides applied on top of ``config.py``, e.g. for testing.

    Raises
    ------
    :class:`.SigningConfigurationError`
        If the token signing configuration is unusable.

    """
    app = Flask('accounts')
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    logging.basicConfig(level=int(app.config.get('LOGLEVEL', 20)))

    users.init_app(app)
    auth.Auth(app)  # Verifies bearer tokens on each request.

    app.register_blueprint(api.blueprint)
    errors.register_error_handlers(app)

    if app.config.get('CREATE_DB'):
        with app.app_context():
            users.create_all()

    return app
