"""
Sanitize: strip source-account metadata from catalog objects.

Objects listed from one account carry ids, versions and location references
that only mean something in that account. Before an object (or an object
embedded in another one) is written to a different account, these fields are
cleared and its id is replaced by a client-supplied temporary id ("#...") so
that references inside a single batch upsert still resolve.
"""
from __future__ import annotations

from .models import CatalogObject

TEMPORARY_ID_PREFIX = "#"


class CatalogDataError(ValueError):
    """Raised when a catalog object is missing the data its type requires."""


def _temporary_id(object_id: str) -> str:
    if object_id.startswith(TEMPORARY_ID_PREFIX):
        return object_id
    return TEMPORARY_ID_PREFIX + object_id


def _clear_account_fields(obj: CatalogObject) -> None:
    obj.id = _temporary_id(obj.id)
    obj.version = None
    obj.updated_at = None
    obj.is_deleted = None
    obj.catalog_v1_ids = None
    obj.present_at_all_locations = True
    obj.present_at_location_ids = None
    obj.absent_at_location_ids = None


def remove_source_account_metadata_from_nested(parent: CatalogObject, child: CatalogObject) -> None:
    """
    Prepare an embedded object for attachment under ``parent``.

    The parent is the container the child ends up in, which may live in the
    target account (merge) or be a freshly sanitized clone.
    """
    _clear_account_fields(child)
    if child.type == "MODIFIER":
        if child.modifier_data is None:
            raise CatalogDataError(f"MODIFIER {child.id} has no modifier_data")
        child.modifier_data.modifier_list_id = parent.id


def remove_source_account_metadata(obj: CatalogObject) -> None:
    _clear_account_fields(obj)

    # Embedded modifiers reference the list by id, so sanitize them after it.
    if obj.type == "MODIFIER_LIST":
        if obj.modifier_list_data is None:
            raise CatalogDataError(f"MODIFIER_LIST {obj.id} has no modifier_list_data")
        for modifier in obj.modifier_list_data.modifiers:
            remove_source_account_metadata_from_nested(obj, modifier)
