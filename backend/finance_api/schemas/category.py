from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str | None = Field(default=None, max_length=512)
    color: str | None = Field(default=None, max_length=7)
    parentCategoryId: uuid.UUID | None = None


class CategoryUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str | None = Field(default=None, max_length=512)
    color: str | None = Field(default=None, max_length=7)


class CategoryActive(BaseModel):
    isActive: bool


class CategoryOut(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    color: str
    parentCategoryId: uuid.UUID | None
    isActive: bool
    createdAt: datetime
    updatedAt: datetime


class CategoryNodeOut(CategoryOut):
    isLeaf: bool
    children: list["CategoryNodeOut"] = Field(default_factory=list)
