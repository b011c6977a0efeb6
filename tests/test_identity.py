"""Tests for :mod:`accounts.auth.identity` and :mod:`accounts.auth.decorators`."""

from unittest import TestCase, mock

from flask import Flask, request
from werkzeug.exceptions import Unauthorized

from accounts.auth import decorators, identity
from accounts.auth.exceptions import IdentityNotFound
from accounts.domain import User

ALICE = User(user_id=1, email='alice@example.com', display_name='Alice')


class TestIdentityFromClaims(TestCase):
    """The ``email`` claim identifies the caller."""

    def test_email_claim(self) -> None:
        """The value of the claim is returned."""
        self.assertEqual(
            identity.identity_from_claims({'email': 'alice@example.com',
                                           'sub': 'something else'}),
            'alice@example.com'
        )

    def test_no_claims(self) -> None:
        """No claims, no identity."""
        with self.assertRaises(IdentityNotFound):
            identity.identity_from_claims(None)
        with self.assertRaises(IdentityNotFound):
            identity.identity_from_claims({})

    def test_malformed_claim(self) -> None:
        """The claim must be a non-empty string."""
        for value in [None, '', '   ', 42, ['alice@example.com']]:
            with self.assertRaises(IdentityNotFound):
                identity.identity_from_claims({'email': value})


@mock.patch(f'{identity.__name__}.users')
class TestResolve(TestCase):
    """Claims are resolved to a stored user."""

    def test_resolve(self, mock_users) -> None:
        """The user with the claimed address is returned."""
        mock_users.find_by_email.return_value = ALICE
        self.assertEqual(identity.resolve({'email': 'alice@example.com'}),
                         ALICE)
        mock_users.find_by_email.assert_called_once_with('alice@example.com')

    def test_no_such_user(self, mock_users) -> None:
        """A claim for a user who does not exist cannot be resolved."""
        mock_users.find_by_email.return_value = None
        with self.assertRaises(IdentityNotFound):
            identity.resolve({'email': 'bob@example.com'})

    def test_resolve_with_address(self, mock_users) -> None:
        """The address is loaded with the user."""
        mock_users.find_by_email_with_address.return_value = ALICE
        self.assertEqual(
            identity.resolve_with_address({'email': 'alice@example.com'}),
            ALICE
        )
        mock_users.find_by_email_with_address.return_value = None
        with self.assertRaises(IdentityNotFound):
            identity.resolve_with_address({'email': 'bob@example.com'})


class TestAuthenticated(TestCase):
    """:func:`.decorators.authenticated` guards routes."""

    def setUp(self) -> None:
        """Create a bare app to host a request context."""
        self.app = Flask('test')

        @decorators.authenticated
        def protected() -> str:
            return 'ok'

        self.protected = protected

    def test_with_claims(self) -> None:
        """Requests with claims get through."""
        with self.app.test_request_context('/'):
            request.auth = {'email': 'alice@example.com'}
            self.assertEqual(self.protected(), 'ok')

    def test_without_claims(self) -> None:
        """Requests without claims are unauthorized."""
        with self.app.test_request_context('/'):
            request.auth = None
            with self.assertRaises(Unauthorized):
                self.protected()

    def test_without_auth_hook(self) -> None:
        """If nothing looked for a token, the request is unauthorized."""
        with self.app.test_request_context('/'):
            with self.assertRaises(Unauthorized):
                self.protected()
