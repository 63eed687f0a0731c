"""Tests for the monthly electricity cost allocation."""

from decimal import Decimal

import pytest

from roombill.core.exceptions import InvalidInput
from roombill.schemas.electric import AllocationRequest, RoomElectricInput
from roombill.services.allocation import allocate
from roombill.services.share_policy import (
    EqualSharePolicy,
    ProportionalSharePolicy,
    SharePolicy,
    get_share_policy,
)

ROOM_NAMES = {1: "Room A", 2: "Room B", 3: "Room C"}


def _request(
    total_money: str = "1600000",
    total_electric: str = "550",
    electrics: list[tuple[int, str, str]] | None = None,
) -> AllocationRequest:
    """Helper: build a request from (room_id, start, end) triples."""
    if electrics is None:
        electrics = [(1, "100", "200"), (2, "50", "120")]
    return AllocationRequest(
        total_money=Decimal(total_money),
        total_electric=Decimal(total_electric),
        month="2025-07",
        electrics=[
            RoomElectricInput(
                room_id=room_id, start_electric=Decimal(start), end_electric=Decimal(end)
            )
            for room_id, start, end in electrics
        ],
    )


class TestAllocate:
    """Unit tests for the allocation engine with the equal split."""

    def test_two_room_scenario(self) -> None:
        """Test the reference bill: 1,600,000 over 550 kWh, two metered rooms."""
        result = allocate(_request(), ROOM_NAMES)

        assert result.price_per_unit == Decimal("1600000") / Decimal("550")
        assert result.share_electric == Decimal("380")
        assert result.share_money == Decimal("380") * result.price_per_unit

        room_a, room_b = result.electric_details
        assert room_a.room_id == 1
        assert room_a.room_name == "Room A"
        assert room_a.shared_electric == Decimal("190")
        assert room_a.total_electric_used == Decimal("290")
        assert round(room_a.total_money) == 843636

        assert room_b.room_id == 2
        assert room_b.shared_electric == Decimal("190")
        assert room_b.total_electric_used == Decimal("260")
        assert round(room_b.total_money) == 756364

        assert room_a.total_money + room_b.total_money == pytest.approx(Decimal("1600000"))

    def test_room_totals_follow_price(self) -> None:
        """Test each room pays its total consumption times the unit price."""
        request = _request(
            total_money="987654.32",
            total_electric="733.5",
            electrics=[(1, "10.5", "88"), (2, "0", "123.25"), (3, "400", "512")],
        )
        result = allocate(request, ROOM_NAMES)

        for entry, detail in zip(request.electrics, result.electric_details):
            own = entry.end_electric - entry.start_electric
            assert detail.total_electric_used == own + detail.shared_electric
            assert detail.total_money == pytest.approx(
                detail.total_electric_used * result.price_per_unit
            )

    def test_shares_reconcile_to_pool(self) -> None:
        """Test the attributed shares add up to the shared pool exactly."""
        result = allocate(
            _request(total_electric="100", electrics=[(1, "0", "0"), (2, "0", "0"), (3, "0", "0")]),
            ROOM_NAMES,
        )
        shares = [d.shared_electric for d in result.electric_details]
        assert sum(shares) == Decimal("100")
        assert shares[0] == pytest.approx(Decimal("100") / 3)

    def test_zero_pool_means_zero_share(self) -> None:
        """Test rooms that account for all consumption get no shared share."""
        result = allocate(_request(total_electric="170"), ROOM_NAMES)
        assert result.share_electric == Decimal("0")
        assert result.share_money == Decimal("0")
        assert all(d.shared_electric == 0 for d in result.electric_details)

    def test_preserves_request_order(self) -> None:
        """Test rooms come back in the order they were sent."""
        result = allocate(
            _request(electrics=[(3, "0", "10"), (1, "0", "20"), (2, "0", "30")]),
            ROOM_NAMES,
        )
        assert [d.room_id for d in result.electric_details] == [3, 1, 2]

    def test_unknown_room_name_falls_back_to_id(self) -> None:
        """Test rooms missing from the directory get a generated name."""
        result = allocate(_request(electrics=[(42, "0", "10")]), ROOM_NAMES)
        assert result.electric_details[0].room_name == "Room 42"

    def test_is_idempotent(self) -> None:
        """Test identical requests produce identical results."""
        request = _request()
        assert allocate(request, ROOM_NAMES) == allocate(request, ROOM_NAMES)


class TestAllocateInvalidInput:
    """Tests for requests the engine refuses to compute."""

    def test_zero_total_electric(self) -> None:
        with pytest.raises(InvalidInput):
            allocate(_request(total_electric="0"), ROOM_NAMES)

    def test_zero_total_money(self) -> None:
        with pytest.raises(InvalidInput):
            allocate(_request(total_money="0"), ROOM_NAMES)

    def test_negative_total_money(self) -> None:
        with pytest.raises(InvalidInput):
            allocate(_request(total_money="-5"), ROOM_NAMES)

    def test_missing_totals(self) -> None:
        """Test a request without bill totals is refused, not computed."""
        request = _request().model_copy(update={"total_money": None})
        with pytest.raises(InvalidInput, match="Total money"):
            allocate(request, ROOM_NAMES)

        request = _request().model_copy(update={"total_electric": None})
        with pytest.raises(InvalidInput, match="Total electricity"):
            allocate(request, ROOM_NAMES)

    def test_empty_room_list(self) -> None:
        with pytest.raises(InvalidInput):
            allocate(_request(electrics=[]), ROOM_NAMES)

    def test_negative_room_consumption(self) -> None:
        with pytest.raises(InvalidInput, match="below its start"):
            allocate(_request(electrics=[(1, "200", "100")]), ROOM_NAMES)

    def test_rooms_exceed_total(self) -> None:
        """Test a negative shared pool is rejected instead of clamped."""
        with pytest.raises(InvalidInput, match="more than the metered total"):
            allocate(_request(total_electric="150"), ROOM_NAMES)

    def test_duplicate_room(self) -> None:
        with pytest.raises(InvalidInput, match="more than once"):
            allocate(_request(electrics=[(1, "0", "10"), (1, "10", "20")]), ROOM_NAMES)


class TestSharePolicies:
    """Tests for the shared pool split rules."""

    def test_equal_split(self) -> None:
        shares = EqualSharePolicy().split(Decimal("380"), [Decimal("100"), Decimal("70")])
        assert shares == [Decimal("190"), Decimal("190")]

    def test_proportional_split(self) -> None:
        shares = ProportionalSharePolicy().split(Decimal("300"), [Decimal("100"), Decimal("200")])
        assert shares == [Decimal("100"), Decimal("200")]

    def test_proportional_falls_back_to_equal(self) -> None:
        """Test the proportional rule splits evenly when nobody used anything."""
        shares = ProportionalSharePolicy().split(Decimal("90"), [Decimal("0"), Decimal("0")])
        assert shares == [Decimal("45"), Decimal("45")]

    def test_empty_room_list(self) -> None:
        assert EqualSharePolicy().split(Decimal("10"), []) == []

    def test_policy_without_weights_cannot_be_created(self) -> None:
        class Unweighted(SharePolicy):
            pass

        with pytest.raises(TypeError):
            Unweighted()

    def test_lookup_by_name(self) -> None:
        assert isinstance(get_share_policy("proportional"), ProportionalSharePolicy)
        assert isinstance(get_share_policy("equal"), EqualSharePolicy)

    def test_proportional_allocation(self) -> None:
        """Test the engine honors the policy it is given."""
        result = allocate(_request(), ROOM_NAMES, ProportionalSharePolicy())
        room_a, room_b = result.electric_details
        assert room_a.shared_electric + room_b.shared_electric == Decimal("380")
        assert room_a.shared_electric == pytest.approx(Decimal("380") * 100 / 170)
        assert room_a.total_money + room_b.total_money == pytest.approx(Decimal("1600000"))
