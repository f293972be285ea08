from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case accepted too
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(CamelModel):
    title: str
    description: str = ""
    priority: str = ""
    due_date: Optional[AwareDatetime] = None
    tags: str = ""
    is_completed: bool = False

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be empty")
        return v


class TaskUpdate(CamelModel):
    """
    Fields to overlay on an existing task.
    Anything left out of the request body keeps its stored value.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[AwareDatetime] = None
    tags: Optional[str] = None
    is_completed: Optional[bool] = None

    @model_validator(mode="after")
    def check_explicit_nulls(self):
        for name in self.model_fields_set:
            if name != "due_date" and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} must not be null")
        if "title" in self.model_fields_set and not self.title.strip():
            raise ValueError("title must not be empty")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class TaskOut(CamelModel):
    id: int
    title: str
    description: str
    priority: str
    due_date: Optional[datetime]
    tags: str
    is_completed: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class QueryRequest(BaseModel):
    query: str


class QueryResponse(CamelModel):
    message: str
    filtered_tasks: List[TaskOut]
    note: str
