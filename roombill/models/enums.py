"""Enum definitions for billing options."""

from enum import Enum


class SharePolicyName(str, Enum):
    """How the shared consumption pool is split across rooms."""

    EQUAL = "equal"  # Same share for every room
    PROPORTIONAL = "proportional"  # Weighted by each room's own consumption
