from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional, Sequence, Set

from ..api.client import CatalogApiError, CatalogHttpClient
from .models import (
    BatchUpsertCatalogObjectsRequest,
    BatchUpsertCatalogObjectsResponse,
    CatalogObject,
    CatalogObjectBatch,
    ListCatalogResponse,
)

logger = logging.getLogger(__name__)

LIST_PATH = "/v2/catalog/list"
BATCH_UPSERT_PATH = "/v2/catalog/batch-upsert"

# The API accepts at most this many objects per batch.
MAX_BATCH_SIZE = 1000


class CatalogService:
    """Catalog operations for one account."""

    def __init__(self, client: CatalogHttpClient) -> None:
        self.client = client

    def list_objects(self, types: Sequence[str]) -> List[CatalogObject]:
        """
        List every catalog object of the given types, following the cursor.

        Raises:
            CatalogApiError: if any page could not be fetched or a cursor repeats
        """
        objects: List[CatalogObject] = []
        cursor: Optional[str] = None
        seen_cursors: Set[str] = set()
        while True:
            params: Dict[str, str] = {"types": ",".join(types)}
            if cursor:
                params["cursor"] = cursor
            page = self.client.get(LIST_PATH, ListCatalogResponse, params=params)
            if page is None:
                raise CatalogApiError(f"Failed to list catalog objects of types {','.join(types)}")
            objects.extend(page.objects)
            cursor = page.cursor
            if not cursor:
                break
            if cursor in seen_cursors:
                raise CatalogApiError(f"Catalog list returned cursor {cursor!r} twice")
            seen_cursors.add(cursor)
        logger.debug("Listed %d catalog objects of types %s", len(objects), ",".join(types))
        return objects

    def batch_upsert(
        self,
        objects: Sequence[CatalogObject],
        batch_size: int = MAX_BATCH_SIZE,
    ) -> Optional[BatchUpsertCatalogObjectsResponse]:
        """
        Create or update objects in a single batch-upsert request.

        Returns None when there is nothing to write.

        Raises:
            CatalogApiError: if the API rejected the request
        """
        if not objects:
            return None
        if batch_size < 1 or batch_size > MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")

        batches = [
            CatalogObjectBatch(objects=list(objects[i:i + batch_size]))
            for i in range(0, len(objects), batch_size)
        ]
        request = BatchUpsertCatalogObjectsRequest(
            idempotency_key=str(uuid.uuid4()),
            batches=batches,
        )
        response = self.client.post(BATCH_UPSERT_PATH, request, BatchUpsertCatalogObjectsResponse)
        if response is None:
            raise CatalogApiError(f"Failed to upsert {len(objects)} catalog objects")
        return response
