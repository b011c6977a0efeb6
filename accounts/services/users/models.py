"""Users datastore models."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from flask_sqlalchemy import SQLAlchemy

db: SQLAlchemy = SQLAlchemy()


class DBUser(db.Model):  # type: ignore
    """
    Account holder.

    +------------------+--------------+------+-----+
    | Field            | Type         | Null | Key |
    +------------------+--------------+------+-----+
    | user_id          | int          | NO   | PRI |
    | email            | varchar(255) | NO   |     |
    | normalized_email | varchar(255) | NO   | UNI |
    | display_name     | varchar(255) | NO   |     |
    | password_hash    | varchar(255) | NO   |     |
    +------------------+--------------+------+-----+
    """

    __tablename__ = 'users'

    user_id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=False)
    """E-mail address as entered at registration."""
    normalized_email = Column(String(255), nullable=False, unique=True)
    """Lower-cased e-mail; the unique index makes registration atomic."""
    display_name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)

    address = relationship('DBAddress', uselist=False, back_populates='user',
                           cascade='all, delete-orphan')


class DBAddress(db.Model):  # type: ignore
    """Postal address, owned by exactly one :class:`.DBUser`."""

    __tablename__ = 'addresses'

    address_id = Column(Integer, primary_key=True)
    user_id = Column(ForeignKey('users.user_id'), nullable=False, unique=True)
    line1 = Column(String(255), nullable=False)
    line2 = Column(String(255))
    city = Column(String(255))
    state = Column(String(255))
    zip_code = Column(String(32))
    country = Column(String(255))

    user = relationship('DBUser', back_populates='address')
