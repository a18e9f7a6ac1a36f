"""
Matcher: find an existing target container equivalent to a source container.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Sequence, Set, TypeVar

T = TypeVar("T")

Encoder = Callable[[T], str]


def find_matching_container(
    source: T,
    targets: Sequence[T],
    encode: Encoder,
) -> Optional[T]:
    """
    Find the target container whose signature equals the source's.

    Args:
        source: Container from the source account
        targets: Containers from the target account, in listing order
        encode: Signature function for this kind of container

    Returns:
        The first matching target container, or None when there is none.
        If the target account already holds several equivalent containers,
        the first one in ``targets`` order is returned.
    """
    signature = encode(source)
    for target in targets:
        if encode(target) == signature:
            return target
    return None


def index_by_signature(
    targets: Iterable[T],
    encode: Encoder,
    on_error: Optional[Callable[[T, Exception], None]] = None,
) -> Dict[str, T]:
    """
    Map signature -> container, keeping the first container per signature.

    Without ``on_error`` an encoding failure propagates. With it, the failing
    container is reported to ``on_error`` and left out of the index.
    """
    index: Dict[str, T] = {}
    for target in targets:
        try:
            signature = encode(target)
        except Exception as e:
            if on_error is None:
                raise
            on_error(target, e)
            continue
        index.setdefault(signature, target)
    return index


def signature_set(children: Iterable[T], encode_child: Encoder) -> Set[str]:
    """Signatures of the given children, for O(1) duplicate checks."""
    return {encode_child(child) for child in children}
