"""
Carga de la configuración desde variables de entorno.

En producción los secretos se inyectan en el entorno desde el gestor de
secretos de la plataforma. Para desarrollo local deben exportarse en la
shell antes de arrancar el servidor.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

REQUIRED_VARIABLES = (
    "SALESFORCE_DOMAIN",
    "SALESFORCE_CLIENT_ID",
    "SALESFORCE_CLIENT_SECRET",
    "SALESFORCE_USERNAME",
    "SALESFORCE_PASSWORD",
    "SALESFORCE_SECURITY_TOKEN",
    "EDGE_CONFIG_ID",
    "EDGE_CONFIG_READ_TOKEN",
    "VERCEL_ACCESS_TOKEN",
)


@dataclass(frozen=True)
class Settings:
    salesforce_domain: str
    salesforce_client_id: str
    salesforce_client_secret: str
    salesforce_username: str
    salesforce_password: str
    salesforce_security_token: str
    edge_config_id: str
    edge_config_read_token: str
    vercel_access_token: str
    vercel_team_id: Optional[str] = None
    chat_preview_root: Optional[str] = None
    salesforce_login_domain: str = "login"
    salesforce_api_version: str = "60.0"
    case_status: str = "New"
    case_priority: str = "Medium"
    case_type: str = "Question"

    @property
    def salesforce_instance_url(self) -> str:
        return f"https://{self.salesforce_domain}.my.salesforce.com"


def load_settings(environ: Mapping[str, str] = os.environ) -> Settings:
    """
    Construye ``Settings`` a partir del entorno.

    Se validan todas las variables requeridas de una sola vez para que el
    error indique la lista completa de lo que falta.

    Args:
        environ: Mapeo de variables de entorno (por defecto ``os.environ``).

    Returns:
        Settings: La configuración inmutable del servicio.

    Raises:
        ConfigurationError: Si falta alguna variable requerida.
    """
    logging.info("Cargando configuración desde variables de entorno...")

    missing = [key for key in REQUIRED_VARIABLES if not environ.get(key)]
    if missing:
        error = ConfigurationError(missing)
        logging.critical(f"Error crítico: {error}")
        raise error

    settings = Settings(
        salesforce_domain=environ["SALESFORCE_DOMAIN"],
        salesforce_client_id=environ["SALESFORCE_CLIENT_ID"],
        salesforce_client_secret=environ["SALESFORCE_CLIENT_SECRET"],
        salesforce_username=environ["SALESFORCE_USERNAME"],
        salesforce_password=environ["SALESFORCE_PASSWORD"],
        salesforce_security_token=environ["SALESFORCE_SECURITY_TOKEN"],
        edge_config_id=environ["EDGE_CONFIG_ID"],
        edge_config_read_token=environ["EDGE_CONFIG_READ_TOKEN"],
        vercel_access_token=environ["VERCEL_ACCESS_TOKEN"],
        vercel_team_id=environ.get("VERCEL_TEAM_ID") or None,
        chat_preview_root=environ.get("INKEEP_CHAT_PREVIEW_ROOT") or None,
        salesforce_login_domain=environ.get("SALESFORCE_LOGIN_DOMAIN") or "login",
        salesforce_api_version=environ.get("SALESFORCE_API_VERSION") or "60.0",
        case_status=environ.get("SALESFORCE_CASE_STATUS") or "New",
        case_priority=environ.get("SALESFORCE_CASE_PRIORITY") or "Medium",
        case_type=environ.get("SALESFORCE_CASE_TYPE") or "Question",
    )
    logging.info("Todas las credenciales se han cargado correctamente desde las variables de entorno.")
    return settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configura el logging raíz con el formato del servicio."""
    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
