"""
Reconcile package: match, merge and clone catalog containers across accounts.
"""
from .clone import CloneResult, plan_clone, run_clone
from .kinds import MODIFIER_LIST
from .matcher import find_matching_container, signature_set
from .merger import CloneKind, merge_into
from .signatures import encode_child, encode_container

__all__ = [
    "CloneKind",
    "CloneResult",
    "MODIFIER_LIST",
    "encode_child",
    "encode_container",
    "find_matching_container",
    "merge_into",
    "plan_clone",
    "run_clone",
    "signature_set",
]
