"""
Protect routes that require an authenticated caller.

:func:`authenticated` relies on :class:`accounts.auth.Auth` having attached
the verified token claims to ``request.auth``. Routes that use it can pass
``request.auth`` on to their controllers.

.. code-block:: python

   @blueprint.route('/address', methods=['GET'])
   @authenticated
   def get_address() -> Response:
       data, status_code, headers = account.get_address(request.auth)
       return jsonify(data), status_code, headers

"""

import logging
from functools import wraps
from typing import Any, Callable

from flask import request
from werkzeug.exceptions import Unauthorized

logger = logging.getLogger(__name__)


def authenticated(func: Callable) -> Callable:
    """Raise :class:`Unauthorized` unless the request carries valid claims."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not getattr(request, 'auth', None):
            logger.debug('No valid token; aborting')
            raise Unauthorized('Not a valid token')
        return func(*args, **kwargs)
    return wrapper
