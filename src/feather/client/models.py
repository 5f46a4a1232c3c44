from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class Todo(BaseModel):
    title: str


class VariableListObject(BaseModel):
    id: UUID
    key: str
    name: Optional[str] = None
