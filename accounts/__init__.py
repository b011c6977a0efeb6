"""
Storefront accounts service.

The accounts service is a Flask application that registers customers,
authenticates them with an e-mail address and password, and issues signed
bearer tokens. Clients present the token on later requests to find out who
they are logged in as, and to read or replace their postal address.

Context
-------
Each request is handled on its own; the only shared state is the users
datastore. A token carries the user's e-mail address and display name, and is
checked for signature, issuer, and expiry on every authenticated request.
There is no server-side session and no way to revoke a token before it
expires.

Layout
------
- :mod:`accounts.services.users` is the credential store.
- :mod:`accounts.auth` issues and verifies tokens, and resolves the caller.
- :mod:`accounts.controllers.account` implements the account operations.
- :mod:`accounts.routes.api` exposes them over HTTP.

"""
