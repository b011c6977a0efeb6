"""Helpers for tests that need an application and a database."""

import json
import os
from unittest import TestCase

from flask import Flask

from accounts.factory import create_web_app
from accounts.services import users

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)),
                           'schema')

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'JWT_SECRET': 'test-secret-that-is-long-enough-for-hs512-'
                  'test-secret-that-is-long-enough-for-hs512',
    'TOKEN_ISSUER': 'https://accounts.example.test',
    'TOKEN_EXPIRY': 3600,
    'PASSWORD_HASH_METHOD': 'pbkdf2:sha256:1000',
    'CREATE_DB': False
}


def load_schema(name: str) -> dict:
    """Load a JSON schema from the ``schema`` directory."""
    with open(os.path.join(SCHEMA_PATH, f'{name}.json')) as f:
        schema: dict = json.load(f)
    return schema


class AppTestCase(TestCase):
    """Provides an application backed by an in-memory SQLite database."""

    def setUp(self) -> None:
        """Create the app and its tables, and push an app context."""
        self.app: Flask = create_web_app(dict(TEST_CONFIG))
        self.ctx = self.app.app_context()
        self.ctx.push()
        users.create_all()

    def tearDown(self) -> None:
        """Clear the database and pop the app context."""
        users.db.session.remove()
        users.drop_all()
        self.ctx.pop()
