"""
Almacén compartido del token de Salesforce sobre Vercel Edge Config.

La lectura usa el endpoint público de Edge Config con el token de lectura;
la escritura usa la API administrativa de Vercel, que exige un token de
acceso y, opcionalmente, el identificador del equipo.
"""
import logging
from typing import Any, Optional

import requests

from .errors import ConfigWriteError

EDGE_CONFIG_READ_URL = "https://edge-config.vercel.com"
VERCEL_API_URL = "https://api.vercel.com"


class EdgeConfigStore:
    """
    Almacén clave-valor respaldado por Edge Config.

    Expone ``get(key)`` y ``write(key, value, existed)``. No hay bloqueo:
    escrituras concurrentes se pisan y gana la última.
    """

    def __init__(
        self,
        edge_config_id: str,
        read_token: str,
        access_token: str,
        team_id: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.edge_config_id = edge_config_id
        self.read_token = read_token
        self.access_token = access_token
        self.team_id = team_id
        self.session = session or requests.Session()

    def get(self, key: str) -> Optional[Any]:
        """
        Lee ``key`` de Edge Config.

        Returns:
            El valor almacenado, o ``None`` si la clave no existe o la
            lectura falla. Una lectura fallida se trata como ausencia para
            que la petición pueda continuar con un token nuevo.
        """
        url = f"{EDGE_CONFIG_READ_URL}/{self.edge_config_id}/item/{key}"
        try:
            response = self.session.get(url, headers={"Authorization": f"Bearer {self.read_token}"})
        except requests.RequestException as e:
            logging.warning(f"No se pudo leer '{key}' de Edge Config: {e}")
            return None

        if response.status_code == 404:
            return None
        if not response.ok:
            logging.warning(f"Lectura de '{key}' en Edge Config devolvió {response.status_code}: {response.text}")
            return None
        return response.json()

    def write(self, key: str, value: Any, existed: bool) -> None:
        """
        Crea o actualiza ``key`` mediante la API administrativa.

        Args:
            key: Clave a escribir.
            value: Valor a guardar.
            existed: Si la clave ya existía; decide entre ``update`` y ``create``.

        Raises:
            ConfigWriteError: Si la API no confirma la escritura.
        """
        operation = "update" if existed else "create"
        url = f"{VERCEL_API_URL}/v1/edge-config/{self.edge_config_id}/items"
        params = {"teamId": self.team_id} if self.team_id else None
        body = {"items": [{"operation": operation, "key": key, "value": value}]}

        try:
            response = self.session.patch(
                url,
                params=params,
                json=body,
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
        except requests.RequestException as e:
            raise ConfigWriteError(None, str(e)) from e

        try:
            result = response.json()
        except ValueError:
            result = None

        if not response.ok or not isinstance(result, dict) or result.get("status") != "ok":
            raise ConfigWriteError(response.status_code, response.text)

        logging.info(f"Edge Config: operación '{operation}' sobre '{key}' confirmada.")
