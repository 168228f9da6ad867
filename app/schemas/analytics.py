# File: app/schemas/analytics.py

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class AnalyticsSummary(BaseModel):
    total_sessions: int = 0
    # Heart-rate and SpO2 monitoring was removed from the device; older
    # app builds still read these keys
    avg_heart_rate: int = 0
    avg_sp_o2: int = Field(0, alias="avgSpO2")
    most_used_level: int
    total_minutes: int = 0
    total_calories: int = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AnalyticsSummaryResponse(BaseModel):
    success: bool = True
    summary: AnalyticsSummary
