"""
Pydantic models for the raw serialized document layout.

This is the JSON tree the browser client persisted in a note's content
field (the Draft raw layout):

    {"blocks": [{"key": "a1b2c", "text": "Hi", "type": "unstyled",
                 "depth": 0,
                 "inlineStyleRanges": [{"offset": 0, "length": 2,
                                        "style": "BOLD"}],
                 "entityRanges": [], "data": {}}],
     "entityMap": {}}

Offsets and lengths are UTF-16 code units.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawModel(BaseModel):
    """Base for raw layout models. Unknown keys written by other clients are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawInlineStyleRange(RawModel):
    offset: int = Field(ge=0)
    length: int = Field(ge=0)
    style: str


class RawBlock(RawModel):
    key: Optional[str] = None
    text: str = ""
    type: str = "unstyled"
    depth: int = 0
    inline_style_ranges: List[RawInlineStyleRange] = Field(
        default_factory=list, alias="inlineStyleRanges"
    )
    entity_ranges: List[Dict[str, Any]] = Field(
        default_factory=list, alias="entityRanges"
    )
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("depth", mode="before")
    @classmethod
    def _clamp_depth(cls, v):
        if v is None:
            return 0
        try:
            return max(0, int(v))
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"invalid depth {v!r}")

    @field_validator("data", mode="before")
    @classmethod
    def _none_data(cls, v):
        return {} if v is None else v


class RawDocument(RawModel):
    blocks: List[RawBlock] = Field(min_length=1)
    entity_map: Dict[str, Any] = Field(default_factory=dict, alias="entityMap")

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


__all__ = [
    "RawBlock",
    "RawDocument",
    "RawInlineStyleRange",
    "RawModel",
]
