"""Integration with the users datastore. Provides authentication."""

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Generator, Optional

from flask import current_app
from retry import retry
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from accounts.domain import Address, User, UserRegistration

from . import passwords
from .exceptions import AuthenticationFailed, EmailAlreadyInUse, NoSuchUser, \
    PasswordPolicyViolation, PersistenceFailed, RegistrationFailed, \
    Unavailable
from .models import db, DBAddress, DBUser

logger = logging.getLogger(__name__)


@contextmanager
def transaction() -> Generator:
    """Context manager for database transaction."""
    try:
        yield db.session
        # The caller may have explicitly committed already, in order to
        # implement exception handling logic. We only want to commit here if
        # there is anything remaining that is not flushed.
        if db.session.new or db.session.dirty or db.session.deleted:
            db.session.commit()
    except OperationalError as e:
        logger.error('Database unavailable, rolling back: %s', e)
        db.session.rollback()
        raise Unavailable('Could not reach the users datastore') from e
    except Exception as e:
        logger.error('Commit failed, rolling back: %s', str(e))
        db.session.rollback()
        raise


def init_app(app: Any) -> None:
    """Set configuration defaults and attach session to the application."""
    app.config.setdefault('SQLALCHEMY_DATABASE_URI', 'sqlite://')
    app.config.setdefault('SQLALCHEMY_TRACK_MODIFICATIONS', False)
    app.config.setdefault('PASSWORD_HASH_METHOD', 'scrypt')
    db.init_app(app)


def create_all() -> None:
    """Create all tables in the database."""
    db.create_all()


def drop_all() -> None:
    """Drop all tables in the database."""
    db.drop_all()


def is_available() -> bool:
    """Check our connection to the database."""
    try:
        db.session.execute(text('SELECT 1'))
    except Exception as e:
        logger.error('Encountered an error talking to database: %s', e)
        return False
    return True


def normalize_email(email: str) -> str:
    """Form of an e-mail address used for lookups and uniqueness."""
    return email.strip().lower()


@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def find_by_email(email: str) -> Optional[User]:
    """Get a user by e-mail address, ignoring case."""
    with transaction() as session:
        db_user = _get_db_user(session, email)
        if db_user is None:
            return None
        return _to_domain(db_user)


@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def find_by_email_with_address(email: str) -> Optional[User]:
    """Get a user by e-mail address, along with their :class:`.Address`."""
    with transaction() as session:
        db_user = _get_db_user(session, email, with_address=True)
        if db_user is None:
            return None
        return _to_domain(db_user, with_address=True)


def email_exists(email: str) -> bool:
    """Determine whether or not an e-mail address is already registered."""
    return find_by_email(email) is not None


@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def verify_password(user: User, password: str) -> bool:
    """Check ``password`` against the stored credential of ``user``."""
    with transaction() as session:
        db_user = session.query(DBUser) \
            .filter(DBUser.user_id == user.user_id) \
            .first()
        encoded = db_user.password_hash if db_user else None
    if encoded is None:
        return False
    return passwords.check_password(password, encoded)


def authenticate(email: str, password: str) -> User:
    """
    Validate e-mail and password. If successful, retrieve user details.

    Parameters
    ----------
    email : str
    password : str
        Password (as entered).

    Returns
    -------
    :class:`.User`

    Raises
    ------
    :class:`AuthenticationFailed`
        Raised if the user does not exist or the password is incorrect. The
        two cases are indistinguishable to the caller.

    """
    user = find_by_email(email)
    if user is None:
        logger.debug('No such user')
        # Burn the same hashing cost as a real check.
        passwords.check_password(password, _dummy_hash(_hash_method()))
        raise AuthenticationFailed('Invalid email or password')
    if not verify_password(user, password):
        logger.debug('Incorrect password for user %s', user.user_id)
        raise AuthenticationFailed('Invalid email or password')
    return user


@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def create(registration: UserRegistration, password: str) -> User:
    """
    Add a new user to the database.

    The unique index on the normalized e-mail address is what guarantees
    that two concurrent registrations cannot both succeed; callers should
    not rely on a prior :func:`email_exists` check.

    Raises
    ------
    :class:`EmailAlreadyInUse`
    :class:`PasswordPolicyViolation`
    :class:`RegistrationFailed`

    """
    passwords.validate_password(password)
    db_user = DBUser(
        email=registration.email.strip(),
        normalized_email=normalize_email(registration.email),
        display_name=registration.display_name,
        password_hash=passwords.hash_password(password, _hash_method())
    )
    try:
        with transaction() as session:
            session.add(db_user)
            session.commit()
            return _to_domain(db_user)
    except IntegrityError as e:
        raise EmailAlreadyInUse('Email address is in use') from e
    except SQLAlchemyError as e:
        raise RegistrationFailed('Could not create user') from e


@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def update_address(email: str, address: Address) -> Address:
    """
    Replace the address of a user.

    Either every field is written or none is. Concurrent updates for the same
    user are last-writer-wins.

    Raises
    ------
    :class:`NoSuchUser`
    :class:`PersistenceFailed`

    """
    try:
        with transaction() as session:
            db_user = _get_db_user(session, email, with_address=True)
            if db_user is None:
                raise NoSuchUser('User does not exist')
            if db_user.address is None:
                db_user.address = DBAddress(**address._asdict())
            else:
                for field, value in address._asdict().items():
                    setattr(db_user.address, field, value)
            session.commit()
            return _to_address(db_user.address)
    except SQLAlchemyError as e:
        raise PersistenceFailed('Could not update address') from e


def _get_db_user(session: Any, email: str,
                 with_address: bool = False) -> Optional[DBUser]:
    query = session.query(DBUser)
    if with_address:
        query = query.options(joinedload(DBUser.address))
    db_user: Optional[DBUser] = query \
        .filter(DBUser.normalized_email == normalize_email(email)) \
        .first()
    return db_user


def _to_address(db_address: DBAddress) -> Address:
    return Address(
        line1=db_address.line1,
        line2=db_address.line2,
        city=db_address.city,
        state=db_address.state,
        zip_code=db_address.zip_code,
        country=db_address.country
    )


def _to_domain(db_user: DBUser, with_address: bool = False) -> User:
    address = None
    if with_address and db_user.address is not None:
        address = _to_address(db_user.address)
    return User(
        user_id=db_user.user_id,
        email=db_user.email,
        display_name=db_user.display_name,
        address=address
    )


def _hash_method() -> str:
    method: str = current_app.config.get('PASSWORD_HASH_METHOD', 'scrypt')
    return method


@lru_cache(maxsize=8)
def _dummy_hash(method: str) -> str:
    return passwords.hash_password('not-a-real-password', method)
