"""Diagnostic utilities for the chatbot module."""

import logging
from typing import Optional

from content.query import PROJECT_COUNT_QUERY, GroqQuery
from content.store import ContentStore

from .errors import ContentStoreError

logger = logging.getLogger(__name__)


def run_content_sanity_check(store: ContentStore) -> Optional[int]:
    """Count projects once to confirm the content store answers. Never raises."""

    if not store.configured:
        logger.warning("[Content check] Content store is not configured.")
        return None

    try:
        count = store.query(GroqQuery(PROJECT_COUNT_QUERY))
    except ContentStoreError as exc:
        logger.warning(f"[Content check] Failed to query content store: {exc.message}")
        return None

    if not isinstance(count, int):
        logger.warning(f"[Content check] Unexpected project count payload: {count!r}")
        return None

    if count == 0:
        logger.warning("[Content check] No projects returned for sanity query.")
    else:
        logger.info(f"[Content check] Content store reachable with {count} project(s).")
    return count
