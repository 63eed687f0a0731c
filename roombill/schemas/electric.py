"""Electricity reading and allocation schemas.

Field aliases follow the remote API's camelCase wire format.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

# The remote API speaks plain JSON numbers
WireDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ElectricRecord(BaseModel):
    """One billing-period meter reading for a room."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    room_id: int = Field(alias="roomId")
    start_electric: WireDecimal = Field(alias="startElectric")
    end_electric: WireDecimal = Field(alias="endElectric")
    month: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    deleted: bool = False

    @property
    def usage(self) -> Decimal:
        """Consumption recorded by this reading."""
        return self.end_electric - self.start_electric


class ElectricSaveItem(BaseModel):
    """A new end reading for a room, as posted to the remote save endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(alias="roomId")
    electric: WireDecimal


class RoomElectricInput(BaseModel):
    """Start and end meter values for one room in an allocation request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    room_id: int = Field(alias="roomId")
    start_electric: WireDecimal = Field(alias="startElectric")
    end_electric: WireDecimal = Field(alias="endElectric")

    @property
    def own_consumption(self) -> Decimal:
        """Consumption measured by the room's own meter."""
        return self.end_electric - self.start_electric


class AllocationRequest(BaseModel):
    """Input for the monthly cost allocation.

    Totals are checked by the allocation engine rather than here so that a
    zero or missing total is reported as invalid input, not a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_money: WireDecimal | None = Field(default=None, alias="totalMoney")
    total_electric: WireDecimal | None = Field(default=None, alias="totalElectric")
    month: str = Field(pattern=MONTH_PATTERN)
    electrics: list[RoomElectricInput]


class RoomAllocation(BaseModel):
    """A room's slice of the bill."""

    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(alias="roomId")
    room_name: str = Field(alias="roomName")
    # Wire name kept as the remote API spells it
    shared_electric: WireDecimal = Field(alias="elctricityUsedInLaundry")
    total_electric_used: WireDecimal = Field(alias="totalElectricUsed")
    total_money: WireDecimal = Field(alias="totalMoney")


class AllocationResult(BaseModel):
    """Output of the monthly cost allocation."""

    model_config = ConfigDict(populate_by_name=True)

    price_per_unit: WireDecimal = Field(alias="pricePerUnit")
    share_electric: WireDecimal = Field(alias="shareElectric")
    share_money: WireDecimal = Field(alias="shareMoney")
    electric_details: list[RoomAllocation] = Field(alias="electricDetails")
