"""Pytest fixtures for building catalog objects."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import pytest

from catalogdemo.catalog.models import CatalogObject

ModifierDef = Tuple[str, Optional[int]]


def build_modifier(object_id: str, name: str, amount: Optional[int], list_id: str) -> CatalogObject:
    data = {"name": name, "modifier_list_id": list_id}
    if amount is not None:
        data["price_money"] = {"amount": amount, "currency": "USD"}
    return CatalogObject.model_validate({
        "type": "MODIFIER",
        "id": object_id,
        "version": 7,
        "modifier_data": data,
    })


def build_modifier_list(
    object_id: str,
    name: str,
    selection_type: str = "SINGLE",
    modifiers: Sequence[ModifierDef] = (),
) -> CatalogObject:
    obj = CatalogObject.model_validate({
        "type": "MODIFIER_LIST",
        "id": object_id,
        "version": 7,
        "updated_at": "2017-06-01T10:00:00Z",
        "present_at_all_locations": False,
        "present_at_location_ids": ["LOC_1"],
        "modifier_list_data": {"name": name, "selection_type": selection_type},
    })
    for i, (mod_name, amount) in enumerate(modifiers):
        obj.modifier_list_data.modifiers.append(
            build_modifier(f"{object_id}_M{i}", mod_name, amount, object_id)
        )
    return obj


@pytest.fixture
def make_modifier_list():
    return build_modifier_list


@pytest.fixture
def make_modifier():
    return build_modifier
