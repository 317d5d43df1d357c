from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logovote.app.namespaces.services import PruneResult

    from ..main import ARQContext

logger = logging.getLogger(__name__)


async def prune_namespaces(ctx: ARQContext) -> PruneResult:
    """Deletes old namespaces without votes."""
    logger.info("Daily namespace prune started")
    result = await ctx["usecases"].superadmin.prune()
    if result.failed:
        logger.warning(
            "Daily namespace prune failed for %d namespaces", len(result.failed)
        )
    return result
