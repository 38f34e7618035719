from flask import Flask, request, jsonify, Response
import os
import logging

from inkeep_salesforce.case_submitter import CaseCreated
from inkeep_salesforce.config import configure_logging, load_settings
from inkeep_salesforce.errors import InvalidRequest, UpstreamSubmissionError
from inkeep_salesforce.schemas import parse_case_request
from inkeep_salesforce.service import build_service

# Configurar logging
configure_logging()

# Cabeceras CORS fijas para todas las respuestas.
ORIGIN_HEADERS = {
    "Access-Control-Allow-Origin": "*",  # restringir a los orígenes de los clientes si procede
    "Access-Control-Allow-Methods": "OPTIONS, POST",
    "Access-Control-Allow-Headers": "Content-Type",
}

# --- Inicialización de Flask y servicio Singleton ---
app = Flask(__name__)
support_case_service = None


def get_support_case_service():
    """
    Construye y reutiliza el servicio de creación de casos.

    La configuración se lee del entorno en la primera petición, no durante
    el arranque, de modo que una configuración incompleta se traduce en un
    500 registrado en los logs en lugar de impedir que el proceso arranque.

    Returns:
        SupportCaseService: La instancia compartida del servicio.

    Raises:
        ConfigurationError: Si faltan variables de entorno requeridas.
    """
    global support_case_service
    if support_case_service is None:
        logging.info("Inicializando el servicio de creación de casos...")
        support_case_service = build_service(load_settings())
    return support_case_service


@app.after_request
def add_origin_headers(response):
    response.headers.update(ORIGIN_HEADERS)
    return response


@app.route('/api/create-support-case', methods=['OPTIONS', 'POST'])
def create_support_case():
    """
    Crea un Caso de Salesforce a partir de una solicitud del widget de soporte.

    Espera un JSON:
    {"formDetails": {"firstName": ..., "email": ..., "additionalDetails": ...},
     "chatSession": {"chatSessionId": ..., "messages": [{"role": ..., "content": ...}]},
     "client": {"currentUrl": ...}}

    Sólo los errores de validación se devuelven con detalle (400); cualquier
    otro fallo se registra y se responde con un 500 sin cuerpo.
    """
    if request.method == 'OPTIONS':
        return Response(status=200)

    try:
        case_request = parse_case_request(request.get_json(force=True, silent=True))
        result = get_support_case_service().submit(case_request)
    except InvalidRequest as e:
        logging.info(f"Petición inválida: {e.message}")
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logging.exception(f"Error inesperado al crear el caso: {e}")
        return Response(status=500)

    if isinstance(result, CaseCreated):
        return Response(status=200)

    error = UpstreamSubmissionError(result.status_code, result.body)
    logging.error(f"No se pudo crear el caso: {error}")
    return Response(status=500)


if __name__ == "__main__":
    # Este bloque es solo para desarrollo local.
    # En producción se usará un servidor WSGI como Gunicorn.
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=True)
