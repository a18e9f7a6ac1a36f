from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogModel(BaseModel):
    """Base for API models: unknown fields are kept so objects round-trip."""

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class Money(CatalogModel):
    amount: Optional[int] = None
    currency: Optional[str] = None


class CatalogModifier(CatalogModel):
    name: Optional[str] = None
    price_money: Optional[Money] = None
    ordinal: Optional[int] = None
    modifier_list_id: Optional[str] = None

    @property
    def amount(self) -> Optional[int]:
        if self.price_money is None:
            return None
        return self.price_money.amount


class CatalogModifierList(CatalogModel):
    name: Optional[str] = None
    ordinal: Optional[int] = None
    selection_type: Optional[str] = None
    modifiers: List["CatalogObject"] = Field(default_factory=list)

    @field_validator("modifiers", mode="before")
    @classmethod
    def _modifiers_none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def discriminant(self) -> Optional[str]:
        return self.selection_type

    @property
    def children(self) -> List["CatalogObject"]:
        return self.modifiers


class CatalogObject(CatalogModel):
    type: str
    id: str
    updated_at: Optional[str] = None
    version: Optional[int] = None
    is_deleted: Optional[bool] = None
    catalog_v1_ids: Optional[List[Dict[str, Any]]] = None
    present_at_all_locations: Optional[bool] = None
    present_at_location_ids: Optional[List[str]] = None
    absent_at_location_ids: Optional[List[str]] = None
    modifier_list_data: Optional[CatalogModifierList] = None
    modifier_data: Optional[CatalogModifier] = None


CatalogModifierList.model_rebuild()


class CatalogIdMapping(CatalogModel):
    client_object_id: Optional[str] = None
    object_id: Optional[str] = None


class CatalogObjectBatch(CatalogModel):
    objects: List[CatalogObject]


class Error(CatalogModel):
    category: Optional[str] = None
    code: Optional[str] = None
    detail: Optional[str] = None
    field: Optional[str] = None


class ErrorResponse(CatalogModel):
    errors: List[Error] = Field(default_factory=list)


class ListCatalogResponse(CatalogModel):
    errors: List[Error] = Field(default_factory=list)
    cursor: Optional[str] = None
    objects: List[CatalogObject] = Field(default_factory=list)


class BatchUpsertCatalogObjectsRequest(CatalogModel):
    idempotency_key: str
    batches: List[CatalogObjectBatch]


class BatchUpsertCatalogObjectsResponse(CatalogModel):
    errors: List[Error] = Field(default_factory=list)
    objects: List[CatalogObject] = Field(default_factory=list)
    updated_at: Optional[str] = None
    id_mappings: List[CatalogIdMapping] = Field(default_factory=list)
