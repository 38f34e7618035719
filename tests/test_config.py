"""
Tests de la carga de configuración.
Run with: pytest tests/test_config.py
"""

import pytest

from inkeep_salesforce.config import REQUIRED_VARIABLES, load_settings
from inkeep_salesforce.errors import ConfigurationError


@pytest.fixture
def environ():
    return {key: f"value-{key.lower()}" for key in REQUIRED_VARIABLES}


def test_load_required(environ):
    environ["SALESFORCE_DOMAIN"] = "acme"
    settings = load_settings(environ)

    assert settings.salesforce_instance_url == "https://acme.my.salesforce.com"
    assert settings.vercel_team_id is None
    assert settings.chat_preview_root is None
    assert settings.salesforce_login_domain == "login"
    assert settings.salesforce_api_version == "60.0"
    assert (settings.case_status, settings.case_priority, settings.case_type) == ("New", "Medium", "Question")


def test_load_optional(environ):
    environ.update({
        "VERCEL_TEAM_ID": "team_1",
        "INKEEP_CHAT_PREVIEW_ROOT": "https://portal.example.com/chat",
        "SALESFORCE_LOGIN_DOMAIN": "test",
        "SALESFORCE_CASE_PRIORITY": "High",
    })
    settings = load_settings(environ)

    assert settings.vercel_team_id == "team_1"
    assert settings.chat_preview_root == "https://portal.example.com/chat"
    assert settings.salesforce_login_domain == "test"
    assert settings.case_priority == "High"


def test_missing_variables_listed(environ):
    del environ["SALESFORCE_DOMAIN"]
    environ["VERCEL_ACCESS_TOKEN"] = ""

    with pytest.raises(ConfigurationError) as exc_info:
        load_settings(environ)

    assert exc_info.value.missing == ["SALESFORCE_DOMAIN", "VERCEL_ACCESS_TOKEN"]
    assert "SALESFORCE_DOMAIN" in str(exc_info.value)
