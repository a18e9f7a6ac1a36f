"""
Clone: copy containers of one kind from a source account into a target account.

For every source container:
- If an equivalent container exists in the target, its missing children are
  merged into it and the target container is queued for upsert (or counted as
  unchanged when nothing was missing).
- Otherwise the source container is sanitized and queued for creation.

A failure while handling one container is recorded and does not stop the
others.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ..catalog.models import CatalogObject
from ..catalog.service import MAX_BATCH_SIZE, CatalogService
from .matcher import index_by_signature
from .merger import CloneKind, merge_into

logger = logging.getLogger(__name__)


@dataclass
class CloneResult:
    type_name: str
    total_processed: int = 0
    merged: int = 0
    created: int = 0
    unchanged: int = 0
    failed: int = 0
    upserted: int = 0
    to_upsert: List[CatalogObject] = field(default_factory=list)
    details: List[Dict[str, Any]] = field(default_factory=list)
    failures: List[Dict[str, Any]] = field(default_factory=list)
    skipped_targets: List[Dict[str, Any]] = field(default_factory=list)

    def summary(self) -> Dict[str, Any]:
        return {
            "type": self.type_name,
            "total_processed": self.total_processed,
            "merged": self.merged,
            "created": self.created,
            "unchanged": self.unchanged,
            "failed": self.failed,
            "skipped_targets": len(self.skipped_targets),
            "upserted": self.upserted,
        }

    def to_report(self) -> Dict[str, Any]:
        return {
            "summary": self.summary(),
            "details": self.details,
            "failures": self.failures,
            "skipped_targets": self.skipped_targets,
        }


def plan_clone(
    source_objects: Sequence[CatalogObject],
    target_objects: Sequence[CatalogObject],
    kind: CloneKind[CatalogObject, CatalogObject],
) -> CloneResult:
    """
    Decide, without any I/O, what must be written to the target account.

    Target containers are mutated in place when children are merged into
    them; source containers that get cloned are sanitized in place.

    Returns:
        CloneResult whose ``to_upsert`` holds the objects to write
    """
    result = CloneResult(type_name=kind.type_name)

    sources = [o for o in source_objects if o.type == kind.type_name]
    targets = [o for o in target_objects if o.type == kind.type_name]

    def skip_target(target: CatalogObject, error: Exception) -> None:
        logger.warning("Skipping target %s %s: %s", kind.type_name, target.id, error)
        result.skipped_targets.append({"target_id": target.id, "error": str(error)})

    target_index = index_by_signature(targets, kind.encode, on_error=skip_target)

    logger.info(
        "Cloning %s: %d source objects, %d target objects",
        kind.type_name,
        len(sources),
        len(targets),
    )

    for source in sources:
        result.total_processed += 1
        source_id = source.id
        try:
            signature = kind.encode(source)
            match = target_index.get(signature)

            if match is None:
                kind.sanitize(source)
                result.to_upsert.append(source)
                # Later sources with the same signature merge into this clone.
                target_index[signature] = source
                result.created += 1
                result.details.append({
                    "action": "created",
                    "source_id": source_id,
                    "signature": signature,
                    "children": len(kind.children(source)),
                })
                continue

            before = len(kind.children(match))
            updated = merge_into(source, match, kind)
            if updated is None:
                result.unchanged += 1
                result.details.append({
                    "action": "unchanged",
                    "source_id": source_id,
                    "target_id": match.id,
                    "signature": signature,
                })
                continue

            # A target matched by several sources is written once.
            if not any(o is updated for o in result.to_upsert):
                result.to_upsert.append(updated)
            result.merged += 1
            result.details.append({
                "action": "merged",
                "source_id": source_id,
                "target_id": updated.id,
                "signature": signature,
                "children_added": len(kind.children(updated)) - before,
            })
        except Exception as e:
            logger.error("Failed to clone %s %s: %s", kind.type_name, source_id, e)
            result.failed += 1
            result.failures.append({
                "source_id": source_id,
                "error": str(e),
            })

    return result


def run_clone(
    source: CatalogService,
    target: CatalogService,
    kind: CloneKind[CatalogObject, CatalogObject],
    dry_run: bool = False,
    batch_size: int = MAX_BATCH_SIZE,
) -> CloneResult:
    """
    List both accounts, plan the clone and write the result to the target.

    Raises:
        CatalogApiError: if listing either account or the upsert fails
    """
    source_objects = source.list_objects([kind.type_name])
    target_objects = target.list_objects([kind.type_name])

    result = plan_clone(source_objects, target_objects, kind)

    if dry_run:
        logger.info("Dry run: %d objects would be upserted", len(result.to_upsert))
        return result

    response = target.batch_upsert(result.to_upsert, batch_size=batch_size)
    if response is not None:
        result.upserted = len(response.objects)
        for error in response.errors:
            logger.error("[%s] %s", error.code, error.detail)
    return result
