"""Authenticator port."""

from typing import Protocol

from travellite.domain.models.principal import Principal


class Authenticator(Protocol):
    """Port for resolving an opaque token into a principal."""

    def resolve(self, token: str) -> Principal:
        """Resolve a token.

        Raises:
            UnauthenticatedError: If the token is unknown.
        """
        ...
