"""Caché del token de acceso de Salesforce en un almacén compartido."""
import logging
import threading
from typing import Optional

from simple_salesforce import SalesforceLogin
from simple_salesforce.exceptions import SalesforceAuthenticationFailed

from .errors import ConfigWriteError, UpstreamAuthError

ACCESS_TOKEN_KEY = "salesforce_access_token"


class TokenCache:
    """
    Obtiene el token de acceso, reutilizando el guardado en el almacén.

    El almacén se inyecta y debe exponer ``get(key)`` y
    ``write(key, value, existed)``. No hay TTL local: la caducidad sólo se
    descubre cuando Salesforce responde 401, y entonces el llamador pide un
    token nuevo con ``get_new_client_credentials_token``.
    """

    def __init__(
        self,
        store,
        client_id: str,
        client_secret: str,
        username: str,
        password: str,
        security_token: str,
        domain: str = "login",
    ):
        self.store = store
        self.client_id = client_id
        self.client_secret = client_secret
        self.username = username
        self.password = password
        self.security_token = security_token
        self.domain = domain
        self._pending_write: Optional[threading.Thread] = None

    def get_access_token(self) -> str:
        token = self.store.get(ACCESS_TOKEN_KEY)
        if token:
            logging.info("Usando token de Salesforce en caché.")
            return token

        logging.info("No hay token en caché; solicitando uno nuevo a Salesforce...")
        return self.get_new_client_credentials_token()

    def get_new_client_credentials_token(self) -> str:
        """
        Solicita un token nuevo con el flujo OAuth de usuario y contraseña.

        La contraseña enviada es la concatenación de la contraseña y el
        token de seguridad, sin separador. El token se guarda en el almacén
        en segundo plano y se devuelve sin esperar a esa escritura.

        Raises:
            UpstreamAuthError: Si Salesforce rechaza las credenciales.
        """
        try:
            access_token, _instance = SalesforceLogin(
                username=self.username,
                password=f"{self.password}{self.security_token}",
                consumer_key=self.client_id,
                consumer_secret=self.client_secret,
                domain=self.domain,
            )
        except SalesforceAuthenticationFailed as e:
            # El detalle del proveedor vive en .auth_message; .message es sólo la plantilla
            auth_message = getattr(e, "auth_message", e.message)
            logging.error(f"Error de autenticación con Salesforce: {e.code} - {auth_message}")
            raise UpstreamAuthError(e.code, auth_message) from e

        logging.info("¡Token de Salesforce obtenido!")
        self._pending_write = threading.Thread(
            target=self._store_token_in_background,
            args=(access_token,),
            name="edge-config-token-write",
            daemon=True,
        )
        self._pending_write.start()
        return access_token

    def set_access_token_in_edge_config(self, token: str) -> None:
        """
        Guarda ``token`` en el almacén, creando o actualizando la clave.

        Raises:
            ConfigWriteError: Si el almacén no confirma la escritura.
        """
        existed = self.store.get(ACCESS_TOKEN_KEY) is not None
        self.store.write(ACCESS_TOKEN_KEY, token, existed)

    def wait_for_pending_write(self, timeout: Optional[float] = None) -> None:
        if self._pending_write is not None:
            self._pending_write.join(timeout)

    def _store_token_in_background(self, token: str) -> None:
        # Un fallo aquí nunca debe afectar a la petición que ya usa el token.
        try:
            self.set_access_token_in_edge_config(token)
        except ConfigWriteError as e:
            logging.error(f"No se pudo guardar el token en Edge Config: {e}")
        except Exception as e:
            logging.error(f"Error inesperado al guardar el token en Edge Config: {e}")
