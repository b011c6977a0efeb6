"""Flask configuration."""

import os

VERSION = '0.3'

LOGLEVEL = os.environ.get('LOGLEVEL', 20)

#################### Tokens ####################
JWT_SECRET = os.environ.get('JWT_SECRET', '')
"""Symmetric key used to sign and verify bearer tokens.

Required, and shared by every worker. The application will not start without
it.
"""

TOKEN_ISSUER = os.environ.get('TOKEN_ISSUER', 'https://localhost:5001')
"""Value of the ``iss`` claim; tokens from any other issuer are rejected."""

TOKEN_AUDIENCE = os.environ.get('TOKEN_AUDIENCE')
"""If set, tokens carry and are checked for this ``aud`` claim."""

TOKEN_ALGORITHM = os.environ.get('TOKEN_ALGORITHM', 'HS512')

TOKEN_EXPIRY = int(os.environ.get('TOKEN_EXPIRY', str(7 * 24 * 3600)))
"""Lifetime of a bearer token, in seconds."""

#################### Users datastore ####################
SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///identity.db')
SQLALCHEMY_TRACK_MODIFICATIONS = False

CREATE_DB = bool(int(os.environ.get('CREATE_DB', '0')))
"""Create the users tables when the application starts."""

PASSWORD_HASH_METHOD = os.environ.get('PASSWORD_HASH_METHOD', 'scrypt')
"""Passed to :func:`werkzeug.security.generate_password_hash`."""
