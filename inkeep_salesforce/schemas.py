"""Esquema de la petición de creación de caso y su validación."""
import json
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidRequest


class _Schema(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Message(_Schema):
    role: Literal["user", "assistant"]
    content: str


class ChatSession(_Schema):
    chat_session_id: str = Field(alias="chatSessionId")
    messages: List[Message]


class FormDetails(_Schema):
    first_name: str = Field(alias="firstName", min_length=1)
    email: str = Field(min_length=1)
    additional_details: Optional[str] = Field(default=None, alias="additionalDetails")


class ClientInfo(_Schema):
    current_url: str = Field(alias="currentUrl", min_length=1)


class CaseRequest(_Schema):
    """Cuerpo validado de ``POST /api/create-support-case``."""

    form_details: FormDetails = Field(alias="formDetails")
    chat_session: Optional[ChatSession] = Field(default=None, alias="chatSession")
    client: ClientInfo


def parse_case_request(data) -> CaseRequest:
    """
    Valida el JSON recibido contra el esquema de ``CaseRequest``.

    No tiene efectos secundarios: se llama antes de cualquier petición
    externa para rechazar entradas mal formadas.

    Args:
        data: El cuerpo ya decodificado (normalmente un ``dict``), o ``None``
            si el cuerpo no era JSON.

    Returns:
        CaseRequest: La petición validada.

    Raises:
        InvalidRequest: Con el detalle de las violaciones del esquema.
    """
    if not isinstance(data, dict):
        raise InvalidRequest("Request schema invalid: body must be a JSON object")

    try:
        return CaseRequest.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise InvalidRequest("Request schema invalid: " + json.dumps(errors)) from e
