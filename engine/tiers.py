"""Attribute tier allocation: only one attribute may sit at each of the best tiers."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from config import ATTRIBUTE_TIERS

logger = logging.getLogger(__name__)


class TierAllocation(BaseModel):
    """Outcome of checking a set of attribute values against their tiers."""
    values: dict[str, int]          # Accepted values after any reverts
    caps: dict[str, int]            # Ceiling assigned to each attribute
    rejected: dict[str, int] = {}   # Reverted attribute -> ceiling it overshot


def allocate_tiers(
    values: dict[str, int],
    previous: dict[str, int] | None = None,
) -> dict[str, int]:
    """Assign each attribute its ceiling from the scarce tiers 5, 4, 3, 2.

    Attributes are ranked by current value, then by previously accepted value
    (so the one that got there first wins), then alphabetically. Walking that
    ranking, a tier stays on offer until an attribute's value reaches it;
    after that the next tier is offered. Every attribute past the last tier is
    capped at the lowest one.

    Args:
        values: Current attribute values.
        previous: Last accepted attribute values, used only to break ties.

    Returns:
        Mapping of attribute name to its ceiling.
    """
    previous = previous or {}
    ranking = sorted(
        values,
        key=lambda name: (-values[name], -previous.get(name, 0), name),
    )

    caps: dict[str, int] = {}
    tier = 0
    for name in ranking:
        cap = ATTRIBUTE_TIERS[tier]
        caps[name] = cap
        if values[name] >= cap and tier < len(ATTRIBUTE_TIERS) - 1:
            tier += 1
    return caps


def enforce_tiers(
    values: dict[str, int],
    previous: dict[str, int],
) -> TierAllocation:
    """Reject increases that overshoot an attribute's assigned tier.

    Each attribute whose value went up past its ceiling is reverted to its
    previous value, then the ceilings are recomputed from the accepted values.

    Args:
        values: Proposed attribute values.
        previous: Last accepted attribute values.

    Returns:
        TierAllocation with the accepted values, final ceilings, and the
        ceiling each rejected attribute overshot.
    """
    caps = allocate_tiers(values, previous)
    rejected = {
        name: caps[name] for name in values
        if values[name] > previous.get(name, 0) and values[name] > caps[name]
    }
    if not rejected:
        return TierAllocation(values=dict(values), caps=caps)

    accepted = dict(values)
    for name in rejected:
        logger.info("Rejected %s=%d above tier %d", name, values[name], caps[name])
        accepted[name] = previous.get(name, 0)

    return TierAllocation(
        values=accepted,
        caps=allocate_tiers(accepted, previous),
        rejected=rejected,
    )
