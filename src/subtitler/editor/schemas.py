"""pydantic schemas for the cue import/export and rendering boundaries."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class CueModel(BaseModel):
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    text: str = ""

    @model_validator(mode="after")
    def _end_after_start(self) -> CueModel:
        if self.end <= self.start:
            raise ValueError("cue end must be greater than start")
        return self


class CueListModel(BaseModel):
    cues: list[CueModel] = Field(default_factory=list)


class RegionModel(BaseModel):
    start: int
    item_ids: list[str]
    end: int | None = None


class ItemModel(BaseModel):
    id: str
    start: int
    end: int
    kind: str = "primary"


class PendingPreviewModel(BaseModel):
    action: Literal["create", "move", "stretch"]
    start: int
    end: int


class RenderSnapshot(BaseModel):
    duration_ms: int
    cursor_ms: int
    view_box_start_ms: int
    pixels_per_second: int
    selected_item_id: str | None = None
    regions: list[RegionModel]
    first_region_index: int = 0
    items: dict[str, ItemModel]
    pending: PendingPreviewModel | None = None
