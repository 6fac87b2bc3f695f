from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class SquareModel(BaseModel):
    row: int = Field(..., ge=0, le=7)
    col: int = Field(..., ge=0, le=7)

    def as_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)


class NewGameRequest(BaseModel):
    mode: Optional[Literal["single_player", "two_player"]] = None


class SelectRequest(BaseModel):
    square: SquareModel


class MoveRequest(BaseModel):
    start: Optional[SquareModel] = Field(
        default=None, description="Optional square to select before moving (drag and drop)."
    )
    destination: SquareModel


class AIMoveRequest(BaseModel):
    delayMs: Optional[int] = Field(default=None, ge=0, le=10_000)
