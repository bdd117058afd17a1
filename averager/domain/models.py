from dataclasses import dataclass, field
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single upstream call.

    ``numbers`` is always usable; ``error`` carries the failure reason when the
    call did not succeed (the numbers are then empty).
    """

    category: str
    numbers: List[Number] = field(default_factory=list)
    error: Optional[str] = None
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


class WindowSnapshot(BaseModel):
    """Before/after view of the window for one merge."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    window_prev_state: List[Number] = Field(
        default_factory=list, alias="windowPrevState"
    )
    window_curr_state: List[Number] = Field(
        default_factory=list, alias="windowCurrState"
    )
    numbers: List[Number] = Field(
        default_factory=list, description="Raw numbers returned upstream"
    )
    avg: float = Field(0.0, description="Mean of windowCurrState, 2 decimals")


class WindowState(BaseModel):
    """Read-only view of the current window."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    window_curr_state: List[Number] = Field(
        default_factory=list, alias="windowCurrState"
    )
    avg: float = 0.0
    capacity: int
