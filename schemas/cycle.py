from pydantic import BaseModel, model_validator, field_validator, Field, ConfigDict
from typing import List, Optional, Any
from core.allocation import SlotArrangementMode
from utils.constants import *


# Define data models
class CycleConfig(BaseModel):
    """Numeric configuration of a cycle, as supplied by the schedule input."""

    model_config = ConfigDict(extra="allow")

    upperBoundCycleTime: float = 0.0
    lowerBoundCycleTime: float = 0.0
    firstCycleStart: float = Field(default=DEFAULT_FIRST_CYCLE_START)
    maximumSlotDuration: float = Field(gt=0)
    numOfPrts: int = Field(default=DEFAULT_NUM_OF_PRTS, ge=0)
    numOfSlots: int = Field(default=DEFAULT_NUM_OF_SLOTS, ge=0)
    slotArrangementMode: SlotArrangementMode = Field(
        default=SlotArrangementMode.parse(DEFAULT_SLOT_ARRANGEMENT_MODE)
    )
    wrapTransmission: bool = False
    portName: str = ""

    @field_validator("slotArrangementMode", mode="before")
    @classmethod
    def parse_mode(cls, value: Any) -> Any:
        """Accept mode names in any case, e.g. "equal_distribution"."""
        if isinstance(value, str):
            return SlotArrangementMode.parse(value)
        return value

    @model_validator(mode="after")
    def check_bounds(self) -> "CycleConfig":
        if self.lowerBoundCycleTime > self.upperBoundCycleTime:
            raise ValueError(
                f"lowerBoundCycleTime ({self.lowerBoundCycleTime}) must not exceed "
                f"upperBoundCycleTime ({self.upperBoundCycleTime})."
            )
        return self


class CycleRecord(CycleConfig):
    """
    Persisted state of a cycle: its configuration, identity, solved values and solved slots.

    Symbolic unknowns are never part of a record; they are rebuilt in every new solver context.
    slotStart[i] and slotDuration[i] belong to priority slotsUsed[i].
    """

    instance: int
    name: str
    cycleDuration: Optional[float] = None
    cycleStart: Optional[float] = None
    slotsUsed: List[int] = Field(default_factory=list)
    slotStart: List[List[float]] = Field(default_factory=list)
    slotDuration: List[List[float]] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_slots(self) -> "CycleRecord":
        if not (len(self.slotsUsed) == len(self.slotStart) == len(self.slotDuration)):
            raise ValueError(
                "slotsUsed, slotStart and slotDuration must have the same length."
            )
        if len(set(self.slotsUsed)) != len(self.slotsUsed):
            raise ValueError("slotsUsed must not contain a priority twice.")
        return self
