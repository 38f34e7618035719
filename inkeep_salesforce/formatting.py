"""
Formateo del campo ``Comments`` del Caso.

El campo es texto libre en Salesforce, así que toda la estructura de la
conversación se aplana en una única cadena legible por un agente.
"""
import re
from typing import Optional, Sequence

from .schemas import CaseRequest, Message

# Marcas de nota al pie que el asistente de Inkeep inserta, p.ej. "[^1]".
FOOTNOTE_PATTERN = re.compile(r"\[\^(\d+)\]")


def format_item(label: str, content: Optional[str]) -> str:
    """Devuelve ``"<label>:\\n<content>\\n"`` o ``""`` si no hay contenido."""
    if content is None or not content.strip():
        return ""
    return f"{label}:\n{content}\n"


def format_chat_history(messages: Optional[Sequence[Message]]) -> str:
    """
    Convierte la conversación en texto, respetando el orden original.

    Los mensajes del usuario se marcan como "Question:" y el resto como
    "Answer:". Las notas al pie se eliminan del contenido.
    """
    if not messages:
        return ""

    formatted_history = "Chat History\n"
    for message in messages:
        if message.role == "user":
            formatted_history += "Question:\n"
        else:
            formatted_history += "Answer:\n"

        clean_content = FOOTNOTE_PATTERN.sub("", message.content or "")
        formatted_history += f"{clean_content}\n"

    return formatted_history


def build_chat_preview_url(preview_root: Optional[str], chat_session_id: Optional[str]) -> Optional[str]:
    if not preview_root or not chat_session_id:
        return None
    return f"{preview_root}?chatId={chat_session_id}"


def build_comments(case_request: CaseRequest, chat_preview_url: Optional[str] = None) -> str:
    chat_session = case_request.chat_session
    sections = [
        format_item("Additional details", case_request.form_details.additional_details),
        format_chat_history(chat_session.messages if chat_session else None),
        "Note:",
        format_item("Inkeep Chat URL", chat_preview_url),
        format_item("Client (Interaction Point)", case_request.client.current_url),
    ]
    return "\n".join(section for section in sections if section)
