"""Authenticator backed by a fixed token table."""

import logging

from travellite.domain.errors import UnauthenticatedError
from travellite.domain.models.principal import Principal

logger = logging.getLogger(__name__)


class StaticTokenAuthenticator:
    """Resolves bearer tokens configured in the TOML file."""

    def __init__(self, principals: dict[str, Principal]) -> None:
        self._principals = dict(principals)
        logger.info(f"Token authentication enabled for {len(self._principals)} principal(s)")

    def resolve(self, token: str) -> Principal:
        principal = self._principals.get(token) if token else None
        if principal is None:
            raise UnauthenticatedError("Invalid or missing access token", field="authorization")
        return principal
