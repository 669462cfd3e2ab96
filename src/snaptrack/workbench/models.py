"""Sample domain models used by the workbench program."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class Address(BaseModel):
    """A postal address owned by a person."""

    id: int
    city: str

    def __str__(self) -> str:
        return f"{self.city} (#{self.id})"


class Person(BaseModel):
    """A person with a mutable list of addresses."""

    id: int
    name: str
    age: int
    addresses: List[Address] = Field(default_factory=list)
