from __future__ import annotations

from numerator.config import AppConfig, IonCredentials, PlmSettings, TokenEndpoints

ION_API_URL = "https://ion.example.test"
PROVIDER_URL = "https://sso.example.test/TENANT_TST/as/"
ODATA_URL = f"{ION_API_URL}/TENANT_TST/FASHIONPLM/odata2/api/odata2"
JOB_URL = f"{ION_API_URL}/TENANT_TST/FASHIONPLM/job/api/job/tasks"


def make_credentials() -> IonCredentials:
    return IonCredentials(
        tenant_id="TENANT_TST",
        client_name="BackendServisi",
        client_id="client-id",
        client_secret="client-secret",
        service_account_access_key="sa-access",
        service_account_secret_key="sa-secret",
    )


def make_plm_settings() -> PlmSettings:
    return PlmSettings(
        environment="TEST",
        ion_api_url=ION_API_URL,
        provider_url=PROVIDER_URL,
        odata_url=ODATA_URL,
        job_url=JOB_URL,
        search_schema="FSH2",
        request_timeout_seconds=5.0,
        endpoints=TokenEndpoints(),
    )


def make_config(*, job_history_limit: int = 1000) -> AppConfig:
    return AppConfig(
        credentials=make_credentials(),
        plm=make_plm_settings(),
        token_expiry_buffer_seconds=300,
        job_history_limit=job_history_limit,
    )
