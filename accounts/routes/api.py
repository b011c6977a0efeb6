"""Provides routes for the account API."""

from flask import Blueprint, jsonify, request

from accounts import status
from accounts.auth.decorators import authenticated
from accounts.controllers import account
from accounts.services import users

blueprint = Blueprint('api', __name__, url_prefix='/api/account')


@blueprint.route('/status', methods=['GET'])
def ok() -> tuple:
    """Health check endpoint."""
    if users.is_available():
        return jsonify({'status': 'ok'}), status.HTTP_200_OK
    return jsonify({'status': 'unavailable'}), \
        status.HTTP_503_SERVICE_UNAVAILABLE


@blueprint.route('', methods=['GET'])
@authenticated
def get_current_user() -> tuple:
    """Get the authenticated user, with a fresh token."""
    data, status_code, headers = account.get_current_user(request.auth)
    return jsonify(data), status_code, headers


@blueprint.route('/emailexists', methods=['GET'])
def check_email_exists() -> tuple:
    """Determine whether an e-mail address is already registered."""
    data, status_code, headers = \
        account.check_email_exists(request.args.get('email'))
    return jsonify(data), status_code, headers


@blueprint.route('/address', methods=['GET'])
@authenticated
def get_address() -> tuple:
    """Get the address of the authenticated user."""
    data, status_code, headers = account.get_address(request.auth)
    return jsonify(data), status_code, headers


@blueprint.route('/address', methods=['PUT'])
@authenticated
def update_address() -> tuple:
    """Replace the address of the authenticated user."""
    payload = request.get_json(force=True, silent=True)
    data, status_code, headers = account.update_address(request.auth, payload)
    return jsonify(data), status_code, headers


@blueprint.route('/login', methods=['POST'])
def login() -> tuple:
    """Log in with e-mail and password."""
    payload = request.get_json(force=True, silent=True)
    data, status_code, headers = account.login(payload)
    return jsonify(data), status_code, headers


@blueprint.route('/register', methods=['POST'])
def register() -> tuple:
    """Create a new account."""
    payload = request.get_json(force=True, silent=True)
    data, status_code, headers = account.register(payload)
    return jsonify(data), status_code, headers
