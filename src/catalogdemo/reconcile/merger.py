"""
Merger: fold the children of a source container into its matched target.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

from .matcher import signature_set

C = TypeVar("C")
K = TypeVar("K")


@dataclass(frozen=True)
class CloneKind(Generic[C, K]):
    """
    Everything the clone algorithm needs to know about one kind of container.

    Attributes:
        type_name: Catalog object type handled by this kind
        encode: Container signature
        encode_child: Child signature
        children: Returns the container's mutable child list
        sanitize_child: Prepares a child for attachment under a container
        sanitize: Prepares a whole container for creation in another account
    """

    type_name: str
    encode: Callable[[C], str]
    encode_child: Callable[[K], str]
    children: Callable[[C], List[K]]
    sanitize_child: Callable[[C, K], None]
    sanitize: Callable[[C], None]


def merge_into(source: C, target: C, kind: CloneKind[C, K]) -> Optional[C]:
    """
    Append the source's children that have no equivalent in the target.

    Children are moved, not copied: each appended child is sanitized against
    the target and then attached to it. Children are attached only after all
    of them were sanitized, so a sanitization error leaves the target as it
    was. The source's child list is not modified.

    Returns:
        The updated target container, or None if nothing was appended.
    """
    target_children = kind.children(target)
    existing = signature_set(target_children, kind.encode_child)

    pending: List[K] = []
    for child in kind.children(source):
        if kind.encode_child(child) in existing:
            continue
        kind.sanitize_child(target, child)
        pending.append(child)

    if not pending:
        return None

    target_children.extend(pending)
    return target
