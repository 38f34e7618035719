"""Excepciones propias del flujo de creación de casos."""


class SupportCaseError(Exception):
    """Clase base para todos los errores del servicio."""


class InvalidRequest(SupportCaseError):
    """
    Los datos enviados por el cliente no son válidos.

    Es el único error que se devuelve al llamador con detalle (HTTP 400),
    ya que el cliente puede corregirlo.
    """

    type = "InvalidRequest"

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"type": self.type, "message": self.message}


class UpstreamAuthError(SupportCaseError):
    """Falló el intercambio OAuth contra Salesforce."""

    def __init__(self, code, message):
        super().__init__(f"Autenticación OAuth fallida: {code} - {message}")
        self.code = code
        self.message = message


class ConfigWriteError(SupportCaseError):
    """La escritura del token en Edge Config no fue confirmada."""

    def __init__(self, status, body):
        super().__init__(f"Escritura en Edge Config fallida: {status} - {body}")
        self.status = status
        self.body = body


class UpstreamSubmissionError(SupportCaseError):
    """Salesforce no creó el Caso (respuesta distinta de 201)."""

    def __init__(self, status, body):
        super().__init__(f"Salesforce rechazó el Caso: {status} - {body}")
        self.status = status
        self.body = body


class ConfigurationError(SupportCaseError):
    """Faltan variables de entorno requeridas."""

    def __init__(self, missing):
        super().__init__(
            f"Faltan las siguientes variables de entorno: {', '.join(missing)}"
        )
        self.missing = list(missing)
