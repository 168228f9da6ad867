# File: app/schemas/preference.py

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class PreferenceRead(BaseModel):
    favorite_level: int
    default_duration: int
    enable_heat_by_default: bool
    enable_notifications: bool
    notification_time: str
    theme: str
    language: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PreferenceUpdate(BaseModel):
    """
    Sparse update. Only fields present in the request body are written;
    theme and language values are checked by the table constraints.
    """

    favorite_level: Optional[int] = None
    default_duration: Optional[int] = None
    enable_heat_by_default: Optional[bool] = None
    enable_notifications: Optional[bool] = None
    notification_time: Optional[str] = Field(None, pattern=TIME_OF_DAY_PATTERN)
    theme: Optional[str] = None
    language: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def changes(self) -> dict:
        """Column name -> new value for every field the caller supplied."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PreferenceResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    preferences: PreferenceRead
