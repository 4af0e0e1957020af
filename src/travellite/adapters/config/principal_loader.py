"""Principal loader."""

from travellite.adapters.config.app_config import AppConfig
from travellite.domain.models.principal import CUSTOMER_TIERS, Principal, PrincipalRole


class PrincipalLoader:
    """Loads API principals, keyed by bearer token, from app config."""

    @staticmethod
    def load(config: AppConfig) -> dict[str, Principal]:
        """Load the token to principal mapping.

        Raises:
            ValueError: On a missing token, an unknown role or tier, or staff without a
                station.
        """
        principals: dict[str, Principal] = {}

        for principal_data in config.get_principals_config():
            if not isinstance(principal_data, dict):
                continue

            token = principal_data.get("token")
            principal_id = principal_data.get("id")
            if not token or not principal_id:
                raise ValueError("Each principal needs a 'token' and an 'id'")

            try:
                role = PrincipalRole(str(principal_data.get("role", "customer")).lower())
            except ValueError:
                raise ValueError(
                    f"Principal '{principal_id}' has unknown role '{principal_data.get('role')}'"
                ) from None

            station_id = principal_data.get("station_id")
            if role is PrincipalRole.STAFF and not station_id:
                raise ValueError(f"Staff principal '{principal_id}' needs a 'station_id'")

            tier = str(principal_data.get("tier", "new")).lower()
            if tier not in CUSTOMER_TIERS:
                raise ValueError(f"Principal '{principal_id}' has unknown tier '{tier}'")

            principals[str(token)] = Principal(
                id=str(principal_id), role=role, station_id=station_id, tier=tier
            )

        return principals
