"""
Pydantic models for propclean reference data.

This module contains data models for:
- NeighborhoodEntry: one row of the neighborhood -> parent city table
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NeighborhoodEntry(BaseModel):
    """
    Neighborhood reference table row.

    Both names are stored upper-cased so lookups line up with values that
    have been through ``std_uppercase``.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(..., min_length=1, description="Neighborhood name")
    city: str = Field(..., min_length=1, description="Parent city name")

    @field_validator("name", "city")
    @classmethod
    def to_upper(cls, value: str) -> str:
        return value.upper()


__all__ = ["NeighborhoodEntry"]
