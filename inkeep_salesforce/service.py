"""Orquestación: token, envío del Caso y el único reintento ante un 401."""
import logging

from .case_submitter import CaseRejected, CaseSubmitter, SubmissionResult
from .config import Settings
from .edge_config import EdgeConfigStore
from .schemas import CaseRequest
from .token_cache import TokenCache

UNAUTHORIZED = 401


class SupportCaseService:
    def __init__(self, token_cache: TokenCache, submitter: CaseSubmitter):
        self.token_cache = token_cache
        self.submitter = submitter

    def submit(self, case_request: CaseRequest) -> SubmissionResult:
        """
        Crea el Caso para ``case_request``.

        El payload se construye antes de tocar la red, así que una petición
        sin asunto falla con ``InvalidRequest`` sin llamadas externas. Si
        Salesforce responde 401 se pide un token nuevo una sola vez y se
        reintenta una sola vez con ese token.
        """
        payload = self.submitter.build_payload(case_request)

        access_token = self.token_cache.get_access_token()
        result = self.submitter.create_support_case(payload, access_token)

        if isinstance(result, CaseRejected) and result.status_code == UNAUTHORIZED:
            logging.warning("El token de Salesforce ha caducado; solicitando uno nuevo y reintentando.")
            access_token = self.token_cache.get_new_client_credentials_token()
            result = self.submitter.create_support_case(payload, access_token)

        return result


def build_service(settings: Settings) -> SupportCaseService:
    store = EdgeConfigStore(
        edge_config_id=settings.edge_config_id,
        read_token=settings.edge_config_read_token,
        access_token=settings.vercel_access_token,
        team_id=settings.vercel_team_id,
    )
    token_cache = TokenCache(
        store,
        client_id=settings.salesforce_client_id,
        client_secret=settings.salesforce_client_secret,
        username=settings.salesforce_username,
        password=settings.salesforce_password,
        security_token=settings.salesforce_security_token,
        domain=settings.salesforce_login_domain,
    )
    submitter = CaseSubmitter(
        instance_url=settings.salesforce_instance_url,
        api_version=settings.salesforce_api_version,
        chat_preview_root=settings.chat_preview_root,
        status=settings.case_status,
        priority=settings.case_priority,
        case_type=settings.case_type,
    )
    return SupportCaseService(token_cache, submitter)
