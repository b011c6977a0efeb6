"""
Script for creating a new user. For dev/test purposes only.

.. warning: DO NOT USE THIS ON A PRODUCTION DATABASE.

"""

import sys

import click

from accounts.domain import Address, UserRegistration
from accounts.factory import create_web_app
from accounts.services import users
from accounts.services.users.exceptions import EmailAlreadyInUse, \
    RegistrationFailed


@click.command()
@click.option('--email', prompt='Email address')
@click.option('--display-name', prompt='Display name')
@click.option('--password', prompt='Password', hide_input=True,
              confirmation_prompt=True)
@click.option('--line1', default=None, help='First line of the address')
@click.option('--city', default=None)
@click.option('--country', default=None)
def create_user(email: str, display_name: str, password: str,
                line1: str = None, city: str = None,
                country: str = None) -> None:
    """Create a new user. For dev/test purposes only."""
    app = create_web_app()
    with app.app_context():
        users.create_all()
        try:
            user = users.create(UserRegistration(email=email,
                                                 display_name=display_name),
                                password)
        except EmailAlreadyInUse:
            click.echo(f'{email} is already registered', err=True)
            sys.exit(1)
        except RegistrationFailed as e:
            click.echo(f'Could not create user: {e}', err=True)
            for error in e.errors:
                click.echo(f'  {error}', err=True)
            sys.exit(1)
        if line1:
            users.update_address(user.email, Address(
                line1=line1, city=city, country=country
            ))
        click.echo(f'Created user {user.user_id}: {user.email}')


if __name__ == '__main__':
    create_user()
