"""Message record data models."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

# Entity keys cycle through player0..player999
PLAYER_KEY_RANGE = 1000


class MessagePayload(BaseModel):
    """JSON body of a synthetic message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_id: str = Field(alias="PlayerId")
    value1: str = Field(alias="Value1")
    value2: str = Field(alias="Value2")

    @classmethod
    def for_index(cls, index: int) -> "MessagePayload":
        """Build the payload for the record at the given sequence index."""
        return cls(
            player_id=f"player{index % PLAYER_KEY_RANGE}",
            value1=f"example_{index}",
            value2=f"example_{index}",
        )

    def to_json(self) -> str:
        """Serialize with the wire field names."""
        return self.model_dump_json(by_alias=True)


@dataclass(frozen=True)
class MessageRecord:
    """One unit of work: sequence id plus serialized payload."""

    id: int
    message_json: str

    def encode(self) -> bytes:
        """UTF-8 bytes written to the connection."""
        return self.message_json.encode("utf-8")
