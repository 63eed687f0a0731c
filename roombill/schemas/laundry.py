"""Laundry usage schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LaundryRecord(BaseModel):
    """One use of the shared laundry machine."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    room_id: int = Field(alias="roomId")
    created_at: datetime = Field(alias="createdAt")


class LaundryStats(BaseModel):
    """Monthly laundry usage for one room."""

    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(alias="roomId")
    room_name: str = Field(alias="roomName")
    count: int
    detail_time: list[LaundryRecord] = Field(default_factory=list, alias="detailTime")
