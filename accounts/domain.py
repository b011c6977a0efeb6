"""Defines the core data structures for the accounts service."""

from typing import Any, Dict, NamedTuple, Optional


class Address(NamedTuple):
    """A postal address. Each user has at most one."""

    line1: str
    """First line of the street address. Required."""

    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    """State, province or region."""

    zip_code: Optional[str] = None
    country: Optional[str] = None

    def to_view(self) -> Dict[str, Optional[str]]:
        """Render as the ``AddressView`` wire shape."""
        return {
            'line1': self.line1,
            'line2': self.line2,
            'city': self.city,
            'state': self.state,
            'zipCode': self.zip_code,
            'country': self.country
        }

    @classmethod
    def from_view(cls, data: Dict[str, Any]) -> 'Address':
        """Build from an ``AddressView`` payload."""
        return cls(
            line1=data['line1'],
            line2=data.get('line2'),
            city=data.get('city'),
            state=data.get('state'),
            zip_code=data.get('zipCode'),
            country=data.get('country')
        )


EMPTY_ADDRESS_VIEW: Dict[str, Optional[str]] = {
    'line1': None,
    'line2': None,
    'city': None,
    'state': None,
    'zipCode': None,
    'country': None
}
"""``AddressView`` returned for a user who has not set an address yet."""


class User(NamedTuple):
    """An account holder, as seen by the rest of the application."""

    user_id: int
    email: str
    """Login handle and username. Unique, without regard to case."""

    display_name: str
    address: Optional[Address] = None

    @property
    def username(self) -> str:
        """Users log in with their e-mail address."""
        return self.email


class UserRegistration(NamedTuple):
    """Data submitted to create a new account."""

    email: str
    display_name: str


class UserResponse(NamedTuple):
    """Returned to the client after any successful authentication."""

    email: str
    display_name: str
    token: str

    def to_dict(self) -> Dict[str, str]:
        """Render as the ``UserResponse`` wire shape."""
        return {
            'email': self.email,
            'displayName': self.display_name,
            'token': self.token
        }
