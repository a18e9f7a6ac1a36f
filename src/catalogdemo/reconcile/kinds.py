"""
Clone kinds wired to the catalog object model.

If a modifier list in the source account has the same name and selection type
as one in the target account, it is not cloned. Instead, modifiers that do not
match any existing modifier (by name and price) are added to the target list.
"""
from __future__ import annotations

from typing import List

from ..catalog.models import CatalogModifier, CatalogModifierList, CatalogObject
from ..catalog.sanitize import (
    CatalogDataError,
    remove_source_account_metadata,
    remove_source_account_metadata_from_nested,
)
from .merger import CloneKind
from .signatures import encode_child, encode_container


def _modifier_list_data(obj: CatalogObject) -> CatalogModifierList:
    if obj.modifier_list_data is None:
        raise CatalogDataError(f"{obj.type} {obj.id} has no modifier_list_data")
    return obj.modifier_list_data


def _modifier_data(obj: CatalogObject) -> CatalogModifier:
    if obj.modifier_data is None:
        raise CatalogDataError(f"{obj.type} {obj.id} has no modifier_data")
    return obj.modifier_data


def encode_modifier_list(obj: CatalogObject) -> str:
    return encode_container(_modifier_list_data(obj))


def encode_modifier(obj: CatalogObject) -> str:
    return encode_child(_modifier_data(obj))


def modifiers_of(obj: CatalogObject) -> List[CatalogObject]:
    return _modifier_list_data(obj).modifiers


MODIFIER_LIST: CloneKind[CatalogObject, CatalogObject] = CloneKind(
    type_name="MODIFIER_LIST",
    encode=encode_modifier_list,
    encode_child=encode_modifier,
    children=modifiers_of,
    sanitize_child=remove_source_account_metadata_from_nested,
    sanitize=remove_source_account_metadata,
)

KINDS = {MODIFIER_LIST.type_name: MODIFIER_LIST}
