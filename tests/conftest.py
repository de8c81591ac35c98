from __future__ import annotations

import os

os.environ.setdefault("PLM_ENVIRONMENT", "TEST")
os.environ.setdefault("PLM_TENANT_ID", "TENANT_TST")
os.environ.setdefault("PLM_CLIENT_ID", "client-id")
os.environ.setdefault("PLM_CLIENT_SECRET", "client-secret")
os.environ.setdefault("PLM_SERVICE_ACCOUNT_ACCESS_KEY", "sa-access")
os.environ.setdefault("PLM_SERVICE_ACCOUNT_SECRET_KEY", "sa-secret")
