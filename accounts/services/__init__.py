"""Services used by the accounts application."""
