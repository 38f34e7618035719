"""Construcción y envío del Caso a Salesforce."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from simple_salesforce import Salesforce
from simple_salesforce.exceptions import SalesforceError

from .errors import InvalidRequest
from .formatting import build_chat_preview_url, build_comments
from .schemas import CaseRequest

CASE_DESCRIPTION = "Description this case"


@dataclass(frozen=True)
class CaseCreated:
    record: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 201

    @property
    def case_id(self) -> Optional[str]:
        return self.record.get("id")


@dataclass(frozen=True)
class CaseRejected:
    status_code: int
    body: Any = None


SubmissionResult = Union[CaseCreated, CaseRejected]


def select_subject(case_request: CaseRequest) -> str:
    """
    Elige el asunto del Caso.

    Se prefiere el primer mensaje de la conversación; si no existe o está
    vacío se usa ``additionalDetails``.

    Raises:
        InvalidRequest: Si no hay ni mensaje inicial ni detalles adicionales.
    """
    chat_session = case_request.chat_session
    if chat_session and chat_session.messages and chat_session.messages[0].content:
        return chat_session.messages[0].content

    additional_details = case_request.form_details.additional_details
    if additional_details:
        return additional_details

    raise InvalidRequest("Please provide at least one user message or additional details")


class CaseSubmitter:
    """Crea registros ``Case`` en Salesforce con un token ya obtenido."""

    def __init__(
        self,
        instance_url: str,
        api_version: str = "60.0",
        chat_preview_root: Optional[str] = None,
        status: str = "New",
        priority: str = "Medium",
        case_type: str = "Question",
    ):
        self.instance_url = instance_url
        self.api_version = api_version
        self.chat_preview_root = chat_preview_root
        self.status = status
        self.priority = priority
        self.case_type = case_type

    def build_payload(self, case_request: CaseRequest) -> Dict[str, str]:
        subject = select_subject(case_request)
        form_details = case_request.form_details
        chat_session = case_request.chat_session
        chat_preview_url = build_chat_preview_url(
            self.chat_preview_root,
            chat_session.chat_session_id if chat_session else None,
        )

        return {
            "Subject": subject,
            "Description": CASE_DESCRIPTION,
            "Status": self.status,
            "Priority": self.priority,
            "SuppliedEmail": form_details.email,
            "SuppliedName": form_details.first_name,
            "Type": self.case_type,
            "Comments": build_comments(case_request, chat_preview_url),
        }

    def create_support_case(self, payload: Dict[str, str], access_token: str) -> SubmissionResult:
        """
        Envía ``payload`` al endpoint ``sobjects/Case``.

        Este método no decide reintentos: devuelve ``CaseRejected`` con el
        código HTTP para que el llamador actúe (p.ej. refrescar el token
        ante un 401). Los errores de red se propagan como excepciones.

        Args:
            payload: Campos del Caso ya construidos.
            access_token: Token Bearer de Salesforce.

        Returns:
            CaseCreated | CaseRejected
        """
        sf = Salesforce(
            instance_url=self.instance_url,
            session_id=access_token,
            version=self.api_version,
        )
        try:
            record = sf.Case.create(payload)
        except SalesforceError as e:
            logging.error(f"Salesforce rechazó la creación del Caso: {e.status} - {e.content}")
            return CaseRejected(status_code=e.status, body=e.content)

        logging.info(f"Caso creado con ID: {record.get('id')}")
        return CaseCreated(record=record)
