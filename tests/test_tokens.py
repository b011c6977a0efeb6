"""Tests for :mod:`accounts.auth.tokens`."""

from datetime import datetime, timedelta, timezone
from unittest import TestCase

import jwt

from accounts.auth.exceptions import ExpiredToken, InvalidToken, \
    SigningConfigurationError
from accounts.auth.tokens import TokenIssuer
from accounts.domain import User

from .util import TEST_CONFIG

SECRET = TEST_CONFIG['JWT_SECRET']
ISSUER = TEST_CONFIG['TOKEN_ISSUER']


class TestIssueToken(TestCase):
    """:meth:`.TokenIssuer.issue` encodes the identity claims of a user."""

    def setUp(self) -> None:
        """Create an issuer and a user."""
        self.issuer = TokenIssuer(ISSUER, SECRET, expiry=3600)
        self.user = User(user_id=1, email='alice@example.com',
                         display_name='Alice')

    def test_token_has_three_parts(self) -> None:
        """The token is a compact JWT."""
        token = self.issuer.issue(self.user)
        self.assertEqual(len(token.split('.')), 3)

    def test_claims(self) -> None:
        """Subject, e-mail, display name, issuer and lifetime are set."""
        claims = self.issuer.verify(self.issuer.issue(self.user))
        self.assertEqual(claims['sub'], 'alice@example.com')
        self.assertEqual(claims['email'], 'alice@example.com')
        self.assertEqual(claims['given_name'], 'Alice')
        self.assertEqual(claims['iss'], ISSUER)
        self.assertEqual(claims['exp'] - claims['iat'], 3600)
        self.assertNotIn('aud', claims)

    def test_signed_with_configured_algorithm(self) -> None:
        """HS512 is used by default."""
        header = jwt.get_unverified_header(self.issuer.issue(self.user))
        self.assertEqual(header['alg'], 'HS512')

    def test_tokens_are_fresh(self) -> None:
        """Two tokens for the same user verify independently."""
        first = self.issuer.issue(self.user)
        second = self.issuer.issue(self.user)
        self.assertEqual(self.issuer.verify(first)['sub'],
                         self.issuer.verify(second)['sub'])


class TestVerifyToken(TestCase):
    """:meth:`.TokenIssuer.verify` rejects anything it did not issue."""

    def setUp(self) -> None:
        """Create an issuer and a user."""
        self.issuer = TokenIssuer(ISSUER, SECRET, expiry=3600)
        self.user = User(user_id=1, email='alice@example.com',
                         display_name='Alice')

    def _claims(self, **overrides: object) -> dict:
        now = datetime.now(tz=timezone.utc)
        claims = {
            'sub': 'alice@example.com',
            'email': 'alice@example.com',
            'iat': now,
            'exp': now + timedelta(hours=1),
            'iss': ISSUER
        }
        claims.update(overrides)
        return claims

    def test_expired(self) -> None:
        """A token past its expiry raises :class:`.ExpiredToken`."""
        past = datetime.now(tz=timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            self._claims(iat=past, exp=past + timedelta(hours=1)),
            SECRET, algorithm='HS512'
        )
        with self.assertRaises(ExpiredToken):
            self.issuer.verify(token)

    def test_wrong_key(self) -> None:
        """A token signed with another key is invalid."""
        token = jwt.encode(self._claims(), 'x' * 64, algorithm='HS512')
        with self.assertRaises(InvalidToken):
            self.issuer.verify(token)

    def test_wrong_issuer(self) -> None:
        """A token from another issuer is invalid."""
        token = jwt.encode(self._claims(iss='https://evil.example'),
                           SECRET, algorithm='HS512')
        with self.assertRaises(InvalidToken):
            self.issuer.verify(token)

    def test_missing_issuer(self) -> None:
        """A token without an issuer is invalid."""
        claims = self._claims()
        del claims['iss']
        token = jwt.encode(claims, SECRET, algorithm='HS512')
        with self.assertRaises(InvalidToken):
            self.issuer.verify(token)

    def test_other_algorithm(self) -> None:
        """A token signed with an algorithm we don't use is invalid."""
        token = jwt.encode(self._claims(), SECRET, algorithm='HS256')
        with self.assertRaises(InvalidToken):
            self.issuer.verify(token)

    def test_not_a_token(self) -> None:
        """Garbage is invalid."""
        with self.assertRaises(InvalidToken):
            self.issuer.verify('definitelynotatoken')

    def test_audience_ignored_by_default(self) -> None:
        """Without a configured audience, ``aud`` is not checked."""
        token = jwt.encode(self._claims(aud='somebody'), SECRET,
                           algorithm='HS512')
        self.assertEqual(self.issuer.verify(token)['aud'], 'somebody')

    def test_audience_when_configured(self) -> None:
        """With a configured audience, tokens must carry it."""
        issuer = TokenIssuer(ISSUER, SECRET, audience='storefront')
        claims = issuer.verify(issuer.issue(self.user))
        self.assertEqual(claims['aud'], 'storefront')
        with self.assertRaises(InvalidToken):
            issuer.verify(self.issuer.issue(self.user))


class TestSigningConfiguration(TestCase):
    """A bad signing configuration is refused up front."""

    def test_missing_key(self) -> None:
        """An empty key is refused."""
        with self.assertRaises(SigningConfigurationError):
            TokenIssuer(ISSUER, '')

    def test_short_key(self) -> None:
        """A key shorter than the HMAC digest is refused."""
        with self.assertRaises(SigningConfigurationError):
            TokenIssuer(ISSUER, 'foosecret')
        TokenIssuer(ISSUER, 'k' * 32, algorithm='HS256')

    def test_missing_issuer(self) -> None:
        """An empty issuer is refused."""
        with self.assertRaises(SigningConfigurationError):
            TokenIssuer('', SECRET)

    def test_unsupported_algorithm(self) -> None:
        """Only HMAC algorithms are supported."""
        with self.assertRaises(SigningConfigurationError):
            TokenIssuer(ISSUER, SECRET, algorithm='none')
