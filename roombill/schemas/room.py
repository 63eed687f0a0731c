"""Room schemas."""

from pydantic import BaseModel, ConfigDict, Field


class Room(BaseModel):
    """Room reference data from the remote room directory."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    room_name: str = Field(alias="roomName")
