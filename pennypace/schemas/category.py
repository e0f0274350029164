import uuid

from pydantic import BaseModel, Field

from pennypace.models.category import DEFAULT_COLOR, DEFAULT_ICON


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    keywords: list[str] = Field(default_factory=list)
    icon: str = Field(default=DEFAULT_ICON, max_length=50)
    color: str = Field(default=DEFAULT_COLOR, max_length=20)


class CategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    keywords: list[str] | None = None
    icon: str | None = Field(default=None, max_length=50)
    color: str | None = Field(default=None, max_length=20)


class CategoryRead(BaseModel):
    id: uuid.UUID
    name: str
    keywords: list[str]
    icon: str
    color: str
    is_preset: bool

    model_config = {"from_attributes": True}


class CategoryRule(BaseModel):
    name: str
    keywords: list[str]
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR
