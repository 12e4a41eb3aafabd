"""API tests for the analytics dashboard endpoints"""

from datetime import datetime, timezone

import pytest
from fastapi import Depends
from sqlalchemy.orm import Session

from crm.database import get_db
from crm.domain.analytics.router import get_analytics_service
from crm.domain.analytics.service import AnalyticsService, age_band, response_rate
from crm.main import app
from crm.models import Customer, Survey, SurveyResponse

NOW = datetime(2025, 3, 20, 12, 0, tzinfo=timezone.utc)

RATED_QUESTIONS = [
    {"id": "q1", "type": "text", "question": "What did you order?"},
    {"id": "q2", "type": "rating", "question": "How satisfied are you?"},
]
UNRATED_QUESTIONS = [{"id": "q1", "type": "text", "question": "Anything else?"}]


@pytest.fixture
def fixed_clock():
    def service_with_fixed_clock(db: Session = Depends(get_db)) -> AnalyticsService:
        return AnalyticsService(db, lookback_months=12, clock=lambda: NOW)

    app.dependency_overrides[get_analytics_service] = service_with_fixed_clock
    yield
    app.dependency_overrides.pop(get_analytics_service, None)


@pytest.fixture
def seeded(db, business, other_business):
    db.add_all(
        [
            Customer(business_id=business.id, name="Alice", email="alice@x.com", age=30, location="NYC",
                     created_at=datetime(2025, 1, 10, 9)),
            Customer(business_id=business.id, name="Bob", email="bob@x.com", age=22, location="NYC",
                     created_at=datetime(2025, 2, 20, 9)),
            Customer(business_id=business.id, name="Cara", email="cara@x.com", location="Chicago",
                     created_at=datetime(2025, 3, 5, 9)),
            # outside the 12 month window
            Customer(business_id=business.id, name="Dan", email="dan@x.com", age=60,
                     created_at=datetime(2023, 1, 1, 9)),
            Customer(business_id=other_business.id, name="Eve", email="eve@x.com", age=40, location="Paris",
                     created_at=datetime(2025, 3, 1, 9)),
        ]
    )
    rated = Survey(business_id=business.id, title="Visit", status="active", questions=RATED_QUESTIONS)
    unrated = Survey(business_id=business.id, title="Open ended", status="draft", questions=UNRATED_QUESTIONS)
    foreign = Survey(business_id=other_business.id, title="Theirs", status="active", questions=RATED_QUESTIONS)
    db.add_all([rated, unrated, foreign])
    db.flush()

    db.add_all(
        [
            SurveyResponse(survey_id=rated.id, business_id=business.id, answers={"q2": "5"},
                           submitted_at=datetime(2025, 3, 2, 10)),
            SurveyResponse(survey_id=rated.id, business_id=business.id, answers={"q2": "4"},
                           submitted_at=datetime(2025, 3, 3, 10)),
            SurveyResponse(survey_id=unrated.id, business_id=business.id, answers={"q1": "hello"},
                           submitted_at=datetime(2025, 3, 10, 10)),
            SurveyResponse(survey_id=rated.id, business_id=business.id, answers={"q2": "2"},
                           submitted_at=datetime(2025, 3, 18, 10)),
            SurveyResponse(survey_id=foreign.id, business_id=other_business.id, answers={"q2": "1"},
                           submitted_at=datetime(2025, 3, 2, 11)),
        ]
    )
    db.commit()


def test_analytics_requires_api_key(client):
    assert client.get("/analytics").status_code == 401


def test_empty_business_returns_zeroed_overview(client, auth_headers, fixed_clock):
    body = client.get("/analytics", headers=auth_headers).json()

    assert body["metrics"] == {
        "totalCustomers": 0,
        "totalSurveys": 0,
        "totalResponses": 0,
        "activeSurveys": 0,
        "avgSatisfaction": 0,
        "responseRate": 0,
    }
    assert body["customerGrowth"] == []
    assert body["responseTrends"] == []
    assert body["satisfactionTrend"] == []
    assert body["ageDemographics"] == []
    assert body["locationDistribution"] == []


def test_overview_metrics(client, auth_headers, seeded, fixed_clock):
    metrics = client.get("/analytics", headers=auth_headers).json()["metrics"]

    assert metrics == {
        "totalCustomers": 4,
        "totalSurveys": 2,
        "totalResponses": 4,
        "activeSurveys": 1,
        "avgSatisfaction": 3.7,
        "responseRate": 50.0,
    }


def test_customer_growth_uses_biweek_buckets(client, auth_headers, seeded, fixed_clock):
    # oldest customer in the window is 2 calendar months before NOW
    growth = client.get("/analytics", headers=auth_headers).json()["customerGrowth"]

    assert growth == [
        {"date": "2025-01-H1", "count": 1},
        {"date": "2025-02-H2", "count": 1},
        {"date": "2025-03-H1", "count": 1},
    ]


def test_response_trends_and_satisfaction_use_day_buckets(client, auth_headers, seeded, fixed_clock):
    body = client.get("/analytics", headers=auth_headers).json()

    assert body["responseTrends"] == [
        {"date": "2025-03-02", "count": 1},
        {"date": "2025-03-03", "count": 1},
        {"date": "2025-03-10", "count": 1},
        {"date": "2025-03-18", "count": 1},
    ]
    # the unrated survey's response on the 10th has no rating and no point
    assert body["satisfactionTrend"] == [
        {"date": "2025-03-02", "rating": 5.0},
        {"date": "2025-03-03", "rating": 4.0},
        {"date": "2025-03-18", "rating": 2.0},
    ]


def test_demographics(client, auth_headers, seeded, fixed_clock):
    body = client.get("/analytics", headers=auth_headers).json()

    assert body["ageDemographics"] == [
        {"range": "18-25", "count": 1},
        {"range": "26-35", "count": 1},
        {"range": "55+", "count": 1},
    ]
    assert body["locationDistribution"] == [
        {"location": "NYC", "count": 2},
        {"location": "Chicago", "count": 1},
    ]


def test_single_chart_endpoint(client, auth_headers, seeded, fixed_clock):
    satisfaction = client.get("/analytics/charts/satisfaction", headers=auth_headers)
    growth = client.get("/analytics/charts/growth", headers=auth_headers)

    assert satisfaction.status_code == 200
    assert [p["rating"] for p in satisfaction.json()] == [5.0, 4.0, 2.0]
    assert len(growth.json()) == 3


def test_unknown_chart_is_not_found(client, auth_headers, fixed_clock):
    response = client.get("/analytics/charts/revenue", headers=auth_headers)

    assert response.status_code == 404


def test_disabled_lookback_includes_old_records(db, business, seeded):
    service = AnalyticsService(db, lookback_months=0, clock=lambda: NOW)

    growth = service.customer_growth(business, NOW)

    # Dan (2023) is now the oldest record: 26 months -> month buckets
    assert growth == [
        {"date": "2023-01", "count": 1},
        {"date": "2025-01", "count": 1},
        {"date": "2025-02", "count": 1},
        {"date": "2025-03", "count": 1},
    ]


@pytest.mark.parametrize(
    "age,band",
    [(12, "<18"), (18, "18-25"), (25, "18-25"), (26, "26-35"), (55, "46-55"), (56, "55+"), (99, "55+")],
)
def test_age_band(age, band):
    assert age_band(age) == band


def test_response_rate():
    assert response_rate(4, 4, 2) == 50.0
    assert response_rate(1, 3, 1) == 33.3
    assert response_rate(5, 0, 3) == 0
    assert response_rate(5, 3, 0) == 0
