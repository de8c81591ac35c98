"""Typed shapes for PLM styles and assignment outcomes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Reference:
    """Expanded navigation property (Brand, Season, ProductSubSubCategory)."""

    id: int
    code: str
    name: str

    @classmethod
    def from_odata(cls, raw: dict[str, Any]) -> "Reference":
        return cls(
            id=int(raw["Id"]),
            code=str(raw.get("Code") or ""),
            name=str(raw.get("Name") or ""),
        )


@dataclass(slots=True, frozen=True)
class StyleRecord:
    style_id: int
    style_code: str | None
    brand: Reference
    season: Reference
    category: Reference
    pattern_spec_number: str | None = None


@dataclass(slots=True, frozen=True)
class PeerStyle:
    style_id: int
    style_code: str | None


@dataclass(slots=True, frozen=True)
class StyleCodeAllocation:
    style_code: str
    pattern_spec_number: str


@dataclass(slots=True, frozen=True)
class AssignmentResult:
    """Outcome of a single StyleCode assignment."""

    style_id: int
    skipped: bool
    brand: Reference
    season: Reference
    product_sub_sub_category: Reference
    similar_styles_count: int
    reason: str | None = None
    old_style_code: str | None = None
    new_style_code: str | None = None
    pattern_spec_number: str | None = None
    synced_to_search_data: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["success"] = True
        return data


@dataclass(slots=True, frozen=True)
class BatchItemResult:
    style_id: int | str
    success: bool
    result: AssignmentResult | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.result is not None:
            return self.result.to_dict()
        return {"style_id": self.style_id, "success": False, "error": self.error}


@dataclass(slots=True, frozen=True)
class BatchResult:
    items: list[BatchItemResult]

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.items if item.success)

    @property
    def failed(self) -> int:
        return len(self.items) - self.succeeded
