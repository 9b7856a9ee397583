from enum import Enum

from pydantic import BaseModel, Field, model_validator


class TieBreak(str, Enum):
    FIRST_SEEN = "first-seen"
    SMALLEST = "smallest"


class Share(BaseModel):
    id: int = Field(gt=0)
    value: int

    def as_point(self) -> tuple[int, int]:
        return self.id, self.value


class ShareSet(BaseModel):
    shares: list[Share]
    n: int
    k: int

    @model_validator(mode="after")
    def _check_threshold(self) -> "ShareSet":
        if not 1 <= self.k <= self.n:
            raise ValueError(f"threshold must satisfy 1 <= k <= n, got {self.k=} {self.n=}")
        if self.n > len(self.shares):
            raise ValueError(f"{self.n=} declared but only {len(self.shares)} shares present")
        return self

    @property
    def ids(self) -> list[int]:
        return [share.id for share in self.shares]


class ReconstructionResult(BaseModel):
    secret: int
    corrupted_ids: list[int]
    frequency: int
    combinations: int
    skipped: int = 0


class ReconstructionSettings(BaseModel):
    workers: int = Field(default=1, ge=1)
    tie_break: TieBreak = TieBreak.FIRST_SEEN
    exact: bool = True
