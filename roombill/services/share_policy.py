"""Policies for splitting the shared consumption pool across rooms."""

from abc import ABC, abstractmethod
from decimal import Decimal

from roombill.models.enums import SharePolicyName


class SharePolicy(ABC):
    """Base class for shared pool split rules.

    Subclasses return one share per room, in room order. The last room
    absorbs the division remainder so the shares always add up to the pool.
    """

    name: SharePolicyName

    @abstractmethod
    def weights(self, own_consumptions: list[Decimal]) -> list[Decimal]:
        """Relative weight of each room in the split."""

    def split(self, pool: Decimal, own_consumptions: list[Decimal]) -> list[Decimal]:
        """Apportion ``pool`` across rooms with the given own consumptions."""
        if not own_consumptions:
            return []
        weights = self.weights(own_consumptions)
        total_weight = sum(weights, Decimal("0"))
        shares = [pool * w / total_weight for w in weights[:-1]]
        shares.append(pool - sum(shares, Decimal("0")))
        return shares


class EqualSharePolicy(SharePolicy):
    """Every room receives the same slice of the pool."""

    name = SharePolicyName.EQUAL

    def weights(self, own_consumptions: list[Decimal]) -> list[Decimal]:
        return [Decimal("1")] * len(own_consumptions)


class ProportionalSharePolicy(SharePolicy):
    """Rooms receive the pool in proportion to their own consumption.

    Falls back to an equal split when no room consumed anything.
    """

    name = SharePolicyName.PROPORTIONAL

    def weights(self, own_consumptions: list[Decimal]) -> list[Decimal]:
        if sum(own_consumptions, Decimal("0")) == 0:
            return [Decimal("1")] * len(own_consumptions)
        return list(own_consumptions)


SHARE_POLICIES: dict[SharePolicyName, SharePolicy] = {
    SharePolicyName.EQUAL: EqualSharePolicy(),
    SharePolicyName.PROPORTIONAL: ProportionalSharePolicy(),
}


def get_share_policy(name: SharePolicyName | str) -> SharePolicy:
    """Look up a share policy by name."""
    return SHARE_POLICIES[SharePolicyName(name)]
