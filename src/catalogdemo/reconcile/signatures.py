"""
Signatures: identifier-free equality keys for catalog entities.

Objects from two different accounts never share ids, so equivalence is decided
by comparing a string derived from the fields that matter to a merchant.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

SIGNATURE_DELIMITER = ":::"


class Container(Protocol):
    """A named grouping entity (e.g. a modifier list) that owns children."""

    @property
    def name(self) -> Optional[str]: ...

    @property
    def discriminant(self) -> Optional[str]: ...

    @property
    def children(self) -> Sequence[Any]: ...


class Child(Protocol):
    """An item owned by exactly one container (e.g. a modifier)."""

    @property
    def name(self) -> Optional[str]: ...

    @property
    def amount(self) -> Optional[int]: ...


def encode_container(container: Container) -> str:
    # Children and ids are not part of the key.
    return f"{container.name}{SIGNATURE_DELIMITER}{container.discriminant}"


def encode_child(child: Child) -> str:
    # An absent amount is the same as a zero amount.
    amount = child.amount
    if amount is None:
        amount = 0
    return f"{child.name}{SIGNATURE_DELIMITER}{amount}"
