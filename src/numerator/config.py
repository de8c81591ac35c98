"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


DEFAULT_ION_API_URL = "https://mingle-ionapi.eu1.inforcloudsuite.com"
DEFAULT_SSO_URL = "https://mingle-sso.eu1.inforcloudsuite.com:443"


@dataclass(slots=True)
class TokenEndpoints:
    authorization: str = "authorization.oauth2"
    token: str = "token.oauth2"
    revoke: str = "revoke_token.oauth2"


@dataclass(slots=True)
class IonCredentials:
    """OAuth client and service account keys taken from the .ionapi file."""

    tenant_id: str
    client_name: str
    client_id: str
    client_secret: str
    service_account_access_key: str
    service_account_secret_key: str


@dataclass(slots=True)
class PlmSettings:
    environment: str
    ion_api_url: str
    provider_url: str
    odata_url: str
    job_url: str
    search_schema: str
    request_timeout_seconds: float
    endpoints: TokenEndpoints


@dataclass(slots=True)
class LoggingSettings:
    level: str = "INFO"
    json: bool = True


@dataclass(slots=True)
class AppConfig:
    credentials: IonCredentials
    plm: PlmSettings
    token_expiry_buffer_seconds: int
    job_history_limit: int
    log_settings: LoggingSettings = field(default_factory=LoggingSettings)


def load_config() -> AppConfig:
    """Load configuration from environment."""
    tenant_id = os.getenv("PLM_TENANT_ID", "")
    credentials = IonCredentials(
        tenant_id=tenant_id,
        client_name=os.getenv("PLM_CLIENT_NAME", "BackendServisi"),
        client_id=os.getenv("PLM_CLIENT_ID", ""),
        client_secret=os.getenv("PLM_CLIENT_SECRET", ""),
        service_account_access_key=os.getenv("PLM_SERVICE_ACCOUNT_ACCESS_KEY", ""),
        service_account_secret_key=os.getenv("PLM_SERVICE_ACCOUNT_SECRET_KEY", ""),
    )

    ion_api_url = os.getenv("PLM_ION_API_URL", DEFAULT_ION_API_URL).rstrip("/")
    plm = PlmSettings(
        environment=os.getenv("PLM_ENVIRONMENT", "TEST"),
        ion_api_url=ion_api_url,
        provider_url=os.getenv("PLM_PROVIDER_URL", f"{DEFAULT_SSO_URL}/{tenant_id}/as/"),
        odata_url=os.getenv(
            "PLM_ODATA_URL", f"{ion_api_url}/{tenant_id}/FASHIONPLM/odata2/api/odata2"
        ).rstrip("/"),
        job_url=os.getenv("PLM_JOB_URL", f"{ion_api_url}/{tenant_id}/FASHIONPLM/job/api/job/tasks"),
        search_schema=os.getenv("PLM_SEARCH_SCHEMA", "FSH2"),
        request_timeout_seconds=float(os.getenv("PLM_REQUEST_TIMEOUT_SECONDS", 30)),
        endpoints=TokenEndpoints(),
    )

    return AppConfig(
        credentials=credentials,
        plm=plm,
        token_expiry_buffer_seconds=int(os.getenv("TOKEN_EXPIRY_BUFFER_SECONDS", 300)),
        job_history_limit=int(os.getenv("JOB_HISTORY_LIMIT", 1000)),
        log_settings=LoggingSettings(
            level=os.getenv("LOG_LEVEL", "INFO"),
            json=os.getenv("LOG_FORMAT", "json").lower() != "console",
        ),
    )
