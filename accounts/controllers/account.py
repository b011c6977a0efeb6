"""
Controllers for the account API.

Login and registration issue a bearer token that the client presents on
subsequent requests. Every response that carries a :class:`.UserResponse`
gets a freshly signed token; tokens are never cached or reused.

Each controller returns a tuple of response data, an HTTP status code, and
extra headers.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from accounts import errors, status
from accounts.auth import identity, tokens
from accounts.auth.exceptions import IdentityNotFound
from accounts.domain import Address, EMPTY_ADDRESS_VIEW, User, \
    UserRegistration, UserResponse
from accounts.services import users
from accounts.services.users.exceptions import AuthenticationFailed, \
    EmailAlreadyInUse, NoSuchUser, PasswordPolicyViolation, \
    PersistenceFailed, RegistrationFailed

from .forms import AddressForm, LoginForm, RegisterForm, form_errors, \
    formdata

logger = logging.getLogger(__name__)

ResponseData = Tuple[Any, int, dict]
Claims = Optional[Dict[str, Any]]

EMAIL_IN_USE = 'Email address is in use'
PROBLEM_UPDATING = 'Problem updating the user'


def get_current_user(claims: Claims) -> ResponseData:
    """
    Get the authenticated user, with a fresh token.

    Parameters
    ----------
    claims : dict
        Verified claims from the bearer token on the request.

    Returns
    -------
    dict
        A ``UserResponse``.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    try:
        user = identity.resolve(claims)
    except IdentityNotFound as e:
        logger.debug('Could not resolve current user: %s', e)
        return _unauthorized()
    return _user_response(user), status.HTTP_200_OK, {}


def check_email_exists(email: Optional[str]) -> ResponseData:
    """Determine whether an e-mail address is already registered."""
    if not email:
        return False, status.HTTP_200_OK, {}
    return users.email_exists(email), status.HTTP_200_OK, {}


def get_address(claims: Claims) -> ResponseData:
    """
    Get the address of the authenticated user.

    Users who have not set an address get an ``AddressView`` with every field
    set to ``None``.
    """
    try:
        user = identity.resolve_with_address(claims)
    except IdentityNotFound as e:
        logger.debug('Could not resolve current user: %s', e)
        return _unauthorized()
    if user.address is None:
        return dict(EMPTY_ADDRESS_VIEW), status.HTTP_200_OK, {}
    return user.address.to_view(), status.HTTP_200_OK, {}


def update_address(claims: Claims,
                   payload: Optional[Dict[str, Any]]) -> ResponseData:
    """
    Replace the address of the authenticated user.

    Parameters
    ----------
    claims : dict
        Verified claims from the bearer token on the request.
    payload : dict
        An ``AddressView``.

    Returns
    -------
    dict
        The ``AddressView`` as stored.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    try:
        user = identity.resolve(claims)
    except IdentityNotFound as e:
        logger.debug('Could not resolve current user: %s', e)
        return _unauthorized()

    form = AddressForm(formdata(payload))
    if not form.validate():
        logger.debug('Address data is not valid')
        return _invalid(form_errors(form))

    address = Address.from_view(form.data)
    try:
        saved = users.update_address(user.email, address)
    except (PersistenceFailed, NoSuchUser) as e:
        logger.error('Address update failed for user %s: %s',
                     user.user_id, e)
        data = errors.api_response(status.HTTP_400_BAD_REQUEST,
                                   PROBLEM_UPDATING)
        return data, status.HTTP_400_BAD_REQUEST, {}
    return saved.to_view(), status.HTTP_200_OK, {}


def login(payload: Optional[Dict[str, Any]]) -> ResponseData:
    """
    Authenticate with e-mail and password.

    An unknown e-mail and a wrong password get exactly the same response.
    """
    form = LoginForm(formdata(payload))
    if not form.validate():
        logger.debug('Login data is not valid')
        return _invalid(form_errors(form))

    try:
        user = users.authenticate(form.email.data, form.password.data)
    except AuthenticationFailed as e:
        logger.debug('Authentication failed: %s', e)
        return _unauthorized()
    return _user_response(user), status.HTTP_200_OK, {}


def register(payload: Optional[Dict[str, Any]]) -> ResponseData:
    """
    Create a new account, and log the new user in.

    The existence check is only there to give a friendly message early. Two
    registrations racing for the same address are settled by the datastore,
    which refuses the second insert; that case gets the same response.
    """
    form = RegisterForm(formdata(payload))
    if not form.validate():
        logger.debug('Registration data is not valid')
        return _invalid(form_errors(form))

    if users.email_exists(form.email.data):
        logger.debug('Registration for an address already in use')
        return _invalid([EMAIL_IN_USE])

    registration = UserRegistration(email=form.email.data,
                                    display_name=form.displayName.data)
    try:
        user = users.create(registration, form.password.data)
    except EmailAlreadyInUse:
        logger.debug('Lost a race to register an address')
        return _invalid([EMAIL_IN_USE])
    except PasswordPolicyViolation as e:
        logger.debug('Password rejected: %s', e.errors)
        return _invalid(e.errors)
    except RegistrationFailed as e:
        logger.error('Registration failed: %s', e)
        data = errors.api_response(status.HTTP_400_BAD_REQUEST)
        return data, status.HTTP_400_BAD_REQUEST, {}
    logger.info('Registered user %s', user.user_id)
    return _user_response(user), status.HTTP_200_OK, {}


def _user_response(user: User) -> Dict[str, str]:
    return UserResponse(email=user.email, display_name=user.display_name,
                        token=tokens.issue(user)).to_dict()


def _unauthorized() -> ResponseData:
    data = errors.api_response(status.HTTP_401_UNAUTHORIZED)
    return data, status.HTTP_401_UNAUTHORIZED, {}


def _invalid(messages: Any) -> ResponseData:
    data = errors.validation_error_response(messages)
    return data, status.HTTP_400_BAD_REQUEST, {}
