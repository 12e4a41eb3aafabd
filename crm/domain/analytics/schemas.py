"""Analytics domain schemas - Pydantic models for dashboard payloads"""

from pydantic import BaseModel


class AnalyticsMetrics(BaseModel):
    totalCustomers: int
    totalSurveys: int
    totalResponses: int
    activeSurveys: int
    avgSatisfaction: float
    responseRate: float


class CountPoint(BaseModel):
    date: str
    count: int


class RatingPoint(BaseModel):
    date: str
    rating: float


class AgeBand(BaseModel):
    range: str
    count: int


class LocationCount(BaseModel):
    location: str
    count: int


class AnalyticsOverview(BaseModel):
    """Schema for the analytics dashboard response"""

    metrics: AnalyticsMetrics
    customerGrowth: list[CountPoint]
    responseTrends: list[CountPoint]
    satisfactionTrend: list[RatingPoint]
    ageDemographics: list[AgeBand]
    locationDistribution: list[LocationCount]
