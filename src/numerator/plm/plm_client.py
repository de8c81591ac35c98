"""PLM OData client used by the StyleCode assignment workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from ..auth.token_service import TokenProvider
from ..exceptions import MissingStyleAttributesError, PlmRequestError, StyleNotFoundError
from ..stylecode.stylecode_models import PeerStyle, Reference, StyleRecord

logger = logging.getLogger(__name__)

STYLE_SELECT = "StyleId,StyleCode,PatternSpecNumber"
STYLE_EXPAND = (
    "ProductSubSubCategory($select=Id,Code,Name),"
    "Season($select=Id,Code,Name),"
    "Brand($select=Id,Code,Name)"
)
REQUIRED_REFERENCES = ("Brand", "Season", "ProductSubSubCategory")


class RecordService(Protocol):
    async def fetch_style(self, style_id: int) -> StyleRecord: ...

    async def fetch_similar_styles(self, season_id: int, category_id: int) -> list[PeerStyle]: ...

    async def update_style(self, style_id: int, style_code: str, pattern_spec_number: str) -> bool: ...

    async def sync_to_search_data(self, style_id: int) -> bool: ...


def _response_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


@dataclass(slots=True)
class PlmClient:
    """Read and update styles through the PLM OData and job APIs."""

    token_provider: TokenProvider
    odata_url: str
    job_url: str
    search_schema: str = "FSH2"
    timeout_seconds: float = 30.0
    log: logging.Logger = field(default_factory=lambda: logger)

    async def fetch_style(self, style_id: int) -> StyleRecord:
        params = {
            "$select": STYLE_SELECT,
            "$expand": STYLE_EXPAND,
            "$filter": f"StyleId eq {style_id} and IsDeleted eq 0",
        }
        self.log.info("plm.style.fetch", extra={"style_id": style_id})
        body = await self._get(f"{self.odata_url}/STYLE", params=params)

        rows = body.get("value") or []
        if not rows:
            raise StyleNotFoundError(style_id)
        raw = rows[0]

        missing = [name for name in REQUIRED_REFERENCES if not raw.get(name)]
        if missing:
            raise MissingStyleAttributesError(style_id, missing)

        style = StyleRecord(
            style_id=int(raw.get("StyleId", style_id)),
            style_code=raw.get("StyleCode") or None,
            pattern_spec_number=raw.get("PatternSpecNumber") or None,
            brand=Reference.from_odata(raw["Brand"]),
            season=Reference.from_odata(raw["Season"]),
            category=Reference.from_odata(raw["ProductSubSubCategory"]),
        )
        self.log.info(
            "plm.style.fetched",
            extra={
                "style_id": style_id,
                "brand": style.brand.code,
                "season": style.season.code,
                "category": style.category.code,
                "style_code": style.style_code,
            },
        )
        return style

    async def fetch_similar_styles(self, season_id: int, category_id: int) -> list[PeerStyle]:
        params = {
            "$select": "StyleId,StyleCode",
            "$filter": (
                f"SeasonId eq {season_id} and ProductSubSubCategoryId eq {category_id} "
                "and IsDeleted eq 0"
            ),
        }
        body = await self._get(f"{self.odata_url}/STYLE", params=params)
        peers = [
            PeerStyle(style_id=int(row["StyleId"]), style_code=row.get("StyleCode") or None)
            for row in body.get("value") or []
        ]
        self.log.info(
            "plm.similar_styles.fetched",
            extra={"season_id": season_id, "category_id": category_id, "count": len(peers)},
        )
        return peers

    async def update_style(self, style_id: int, style_code: str, pattern_spec_number: str) -> bool:
        headers = await self._headers(content_type=True)
        payload = {"StyleCode": style_code, "PatternSpecNumber": pattern_spec_number}
        url = f"{self.odata_url}/STYLE({style_id})"
        self.log.info("plm.style.update", extra={"style_id": style_id, "payload": payload})
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.patch(url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise PlmRequestError(f"PLM update failed for StyleId {style_id}: {exc}") from exc

        if response.status_code >= 400:
            raise PlmRequestError(
                f"PLM update failed for StyleId {style_id} with status {response.status_code}",
                status_code=response.status_code,
                details=_response_details(response),
            )
        if response.status_code != 204:
            self.log.warning(
                "plm.style.update.unexpected_status",
                extra={"style_id": style_id, "status_code": response.status_code},
            )
            return False
        return True

    async def sync_to_search_data(self, style_id: int) -> bool:
        """Ask PLM to reindex the style; failures are logged and reported as ``False``."""

        payload = {
            "TaskId": "syncSearchData",
            "IsSystem": True,
            "CustomData": [
                {"key": "cluster", "value": "styleoverview"},
                {"key": "moduleId", "value": str(style_id)},
                {"key": "schema", "value": self.search_schema},
                {"key": "updateOrgLevelPath", "value": "true"},
            ],
            "Sequence": 1,
        }
        try:
            headers = await self._headers(content_type=True)
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.job_url, headers=headers, json=payload)
        except Exception as exc:
            self.log.warning("plm.sync.failed", extra={"style_id": style_id, "error": str(exc)})
            return False

        if response.status_code >= 400:
            self.log.warning(
                "plm.sync.failed",
                extra={
                    "style_id": style_id,
                    "status_code": response.status_code,
                    "details": _response_details(response),
                },
            )
            return False
        self.log.info(
            "plm.sync.created", extra={"style_id": style_id, "status_code": response.status_code}
        )
        return True

    async def _headers(self, *, content_type: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": await self.token_provider.get_authorization_header(),
            "Accept": "application/json",
        }
        if content_type:
            headers["Content-Type"] = "application/json"
        return headers

    async def _get(self, url: str, *, params: dict[str, str]) -> dict[str, Any]:
        headers = await self._headers()
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise PlmRequestError(f"PLM request failed: {exc}") from exc
        if response.status_code != 200:
            raise PlmRequestError(
                f"PLM request failed with status {response.status_code}",
                status_code=response.status_code,
                details=_response_details(response),
            )
        return response.json()


__all__ = ["PlmClient", "RecordService"]
