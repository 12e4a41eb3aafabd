"""Analytics service - Builds dashboard metrics and chart series"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...analytics import aggregate_time_series, average_rating, round_half_up, satisfaction_extractor
from ...config import ANALYTICS_LOOKBACK_MONTHS
from ...models import Business
from .repository import AnalyticsRepository

logger = logging.getLogger(__name__)

# (label, lowest age, highest age); None = open ended
AGE_BANDS = [
    ("<18", None, 17),
    ("18-25", 18, 25),
    ("26-35", 26, 35),
    ("36-45", 36, 45),
    ("46-55", 46, 55),
    ("55+", 56, None),
]


def age_band(age: int) -> str:
    for label, low, high in AGE_BANDS:
        if (low is None or age >= low) and (high is None or age <= high):
            return label
    return AGE_BANDS[-1][0]


def response_rate(total_responses: int, total_customers: int, total_surveys: int) -> float:
    """Responses as a percentage of every customer answering every survey"""
    possible = total_customers * total_surveys
    if possible <= 0:
        return 0
    return round_half_up(total_responses / possible * 100)


class AnalyticsService:
    """Service layer for analytics"""

    def __init__(
        self,
        db: Session,
        lookback_months: int = ANALYTICS_LOOKBACK_MONTHS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.repo = AnalyticsRepository()
        self.lookback_months = lookback_months
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def window_start(self, now: datetime) -> Optional[datetime]:
        if self.lookback_months <= 0:
            return None
        return now - relativedelta(months=self.lookback_months)

    def get_metrics(self, business: Business) -> dict:
        totals = self.repo.get_totals(self.db, business.id)
        responses = self.repo.get_responses(self.db, business.id)
        extract = satisfaction_extractor(self.repo.get_survey_questions(self.db, business.id))

        return {
            "totalCustomers": totals["total_customers"],
            "totalSurveys": totals["total_surveys"],
            "totalResponses": totals["total_responses"],
            "activeSurveys": totals["active_surveys"],
            "avgSatisfaction": average_rating(extract(response) for response in responses),
            "responseRate": response_rate(
                totals["total_responses"], totals["total_customers"], totals["total_surveys"]
            ),
        }

    def customer_growth(self, business: Business, now: datetime) -> list[dict]:
        customers = self.repo.get_customers(self.db, business.id, self.window_start(now))
        return aggregate_time_series(customers, "created_at", "count", now=now)

    def response_trends(self, business: Business, now: datetime) -> list[dict]:
        responses = self.repo.get_responses(self.db, business.id, self.window_start(now))
        return aggregate_time_series(responses, "submitted_at", "count", now=now)

    def satisfaction_trend(self, business: Business, now: datetime) -> list[dict]:
        responses = self.repo.get_responses(self.db, business.id, self.window_start(now))
        extract = satisfaction_extractor(self.repo.get_survey_questions(self.db, business.id))
        return aggregate_time_series(responses, "submitted_at", "average", extract, now=now)

    def age_demographics(self, business: Business) -> list[dict]:
        counts = {label: 0 for label, _, _ in AGE_BANDS}
        for age in self.repo.get_customer_ages(self.db, business.id):
            counts[age_band(age)] += 1
        return [{"range": label, "count": count} for label, count in counts.items() if count]

    def location_distribution(self, business: Business) -> list[dict]:
        return [
            {"location": location, "count": count}
            for location, count in self.repo.get_location_counts(self.db, business.id)
        ]

    def get_overview(self, business: Business) -> dict:
        """Everything the analytics dashboard renders"""
        now = self.clock()
        logger.info(f"📊 Building analytics for business {business.id}")

        return {
            "metrics": self.get_metrics(business),
            "customerGrowth": self.customer_growth(business, now),
            "responseTrends": self.response_trends(business, now),
            "satisfactionTrend": self.satisfaction_trend(business, now),
            "ageDemographics": self.age_demographics(business),
            "locationDistribution": self.location_distribution(business),
        }

    def get_chart(self, business: Business, chart: str) -> list[dict]:
        """A single chart series"""
        now = self.clock()
        if chart == "responses":
            return self.response_trends(business, now)
        if chart == "growth":
            return self.customer_growth(business, now)
        if chart == "satisfaction":
            return self.satisfaction_trend(business, now)
        if chart == "age":
            return self.age_demographics(business)
        if chart == "location":
            return self.location_distribution(business)
        raise HTTPException(status_code=404, detail=f"Unknown chart: {chart}")
