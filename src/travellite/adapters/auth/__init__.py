"""Authentication adapters."""

from travellite.adapters.auth.static_token_authenticator import StaticTokenAuthenticator

__all__ = ["StaticTokenAuthenticator"]
