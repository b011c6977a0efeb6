"""Provides forms for login, registration, and address updates.

Field names match the keys of the JSON payloads, so that a request body can be
fed straight into a form with :func:`formdata`.
"""

from typing import Any, Dict, List, Optional

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired, Email, Length, optional


class JSONForm(FlaskForm):
    """Base for forms populated from a JSON body rather than a browser."""

    class Meta:
        csrf = False


class LoginForm(JSONForm):
    """Log in form."""

    email = StringField('Email', validators=[DataRequired()])
    password = PasswordField('Password', validators=[DataRequired()])


class RegisterForm(JSONForm):
    """Registration form."""

    displayName = StringField('Display name',
                              validators=[DataRequired(), Length(max=255)])
    email = StringField('Email',
                        validators=[DataRequired(), Email(), Length(max=255)])
    password = PasswordField('Password', validators=[DataRequired()])


class AddressForm(JSONForm):
    """Postal address. Only the first line is required."""

    line1 = StringField('Address line 1',
                        validators=[DataRequired(), Length(max=255)])
    line2 = StringField('Address line 2',
                        validators=[optional(), Length(max=255)])
    city = StringField('City', validators=[optional(), Length(max=255)])
    state = StringField('State', validators=[optional(), Length(max=255)])
    zipCode = StringField('Zip code', validators=[optional(), Length(max=32)])
    country = StringField('Country',
                          validators=[optional(), Length(max=255)])


def formdata(payload: Optional[Dict[str, Any]]) -> MultiDict:
    """Convert a JSON payload to form data, dropping null values."""
    if not isinstance(payload, dict):
        return MultiDict()
    return MultiDict({
        key: str(value) for key, value in payload.items() if value is not None
    })


def form_errors(form: FlaskForm) -> List[str]:
    """Flatten the validation errors of ``form`` into a list of messages."""
    return [
        f'{form[name].label.text}: {message}'
        for name, messages in form.errors.items()
        for message in messages
    ]
