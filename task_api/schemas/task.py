from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from task_api.utils.sanitization import sanitize_string


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TaskBase(_CamelModel):
    task: str = Field(..., min_length=1)
    due_date: date
    status: str = Field(..., min_length=1, max_length=50)
    priority: str = Field(..., min_length=1, max_length=50)

    @field_validator("task", "status", "priority", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class TaskCreate(TaskBase):
    created_by: str = Field(..., min_length=1, max_length=36)


class TaskUpdate(_CamelModel):
    """Partial update. Only these fields may change; anything else is rejected."""

    task: str | None = Field(None, min_length=1)
    due_date: date | None = None
    status: str | None = Field(None, min_length=1, max_length=50)
    priority: str | None = Field(None, min_length=1, max_length=50)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"

    @field_validator("task", "status", "priority", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("task", "due_date", "status", "priority")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


class Task(TaskBase):
    id: str = Field(..., validation_alias=AliasChoices("task_id", "id"))
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class TaskMessage(BaseModel):
    message: str
    task: Task
