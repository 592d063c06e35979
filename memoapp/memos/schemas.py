from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List

class Category(str, Enum):
    personal = "personal"
    work = "work"
    study = "study"
    idea = "idea"
    other = "other"

MEMO_CATEGORIES = {
    Category.personal.value: "Personal",
    Category.work.value: "Work",
    Category.study.value: "Study",
    Category.idea.value: "Idea",
    Category.other.value: "Other",
}

def clean_tags(tags: list[str] | None) -> list[str]:
    """Strip tags, drop empties and repeats, keep first-seen order."""
    out: list[str] = []
    for t in tags or []:
        t = t.strip().lstrip("#").strip()
        if t and t not in out:
            out.append(t)
    return out

class MemoCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = ""
    category: Category = Category.other
    tags: List[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def _tags(cls, v: list[str]) -> list[str]:
        return clean_tags(v)

class MemoUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = None
    category: Optional[Category] = None
    tags: Optional[List[str]] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("tags")
    @classmethod
    def _tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else clean_tags(v)

class MemoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    content: str
    category: str
    tags: List[str]
    created_at: datetime
    updated_at: datetime

class MemoList(BaseModel):
    items: List[MemoOut]
    total: int

class CategoryOut(BaseModel):
    value: str
    label: str
