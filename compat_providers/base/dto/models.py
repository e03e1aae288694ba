"""Pydantic models for the ``GET models`` listing."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    object: Optional[str] = None
    owned_by: Optional[str] = None
    created: Optional[int] = None


class ModelList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    object: Optional[str] = None
    data: List[ModelInfo] = Field(default_factory=list)

    @property
    def ids(self) -> List[str]:
        return [m.id for m in self.data]


__all__ = ["ModelInfo", "ModelList"]
