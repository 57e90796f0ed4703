from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Ids are stored in a signed 64-bit INTEGER column
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    A Todo item. Used both as the create payload and as the response body.

    Validation is strict: id must be a JSON integer, task a string and
    completed a boolean. Unknown fields are ignored.
    """

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "example": {
                "id": 3,
                "task": "Buy milk",
                "completed": False,
            }
        },
    )

    id: int = Field(..., ge=ID_MIN, le=ID_MAX, description="Client-supplied unique identifier")
    task: str = Field(..., description="Task text")
    completed: bool = Field(default=False, description="Completion status flag")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo. The id comes from the path; an id
    sent in the body is ignored.
    """

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "example": {
                "task": "Buy milk",
                "completed": True,
            }
        },
    )

    task: str = Field(..., description="New task text")
    completed: bool = Field(default=False, description="New completion status flag")


# PUBLIC_INTERFACE
class Message(BaseModel):
    """Plain message body used for confirmations and errors."""

    message: str


TodoList = TypeAdapter(List[Todo])
