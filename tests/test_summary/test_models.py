"""Tests for summary result and record models."""

import json
from datetime import date

from memoir.summary.models import (
    DailyActivityStats,
    DailySummaryRecord,
    DailySummaryResult,
    TimelineEntry,
    TopKeyword,
)


def _result():
    return DailySummaryResult(
        date="2024-05-01",
        top_keywords=(TopKeyword("파이썬", 5), TopKeyword("뉴스", 2), TopKeyword("쇼핑", 1)),
        timeline=(
            TimelineEntry("09:00", "뉴스 읽기"),
            TimelineEntry("21:30", "쇼핑"),
            TimelineEntry("13:00", "강의 시청"),
        ),
        summary_text=("셋째 문장", "첫째 문장", "둘째 문장"),
        activity_stats=DailyActivityStats(
            total_usage_minutes=40,
            category_percentages={"뉴스, 정보 탐색": 75, "쇼핑": 25},
        ),
    )


def test_record_round_trip_preserves_order():
    result = _result()
    record = DailySummaryRecord.from_result(result)

    assert record.date == date(2024, 5, 1)
    assert record.total_usage_minutes == 40
    assert record.to_result() == result


def test_record_columns_are_json_text():
    record = DailySummaryRecord.from_result(_result())

    assert json.loads(record.top_keywords_json)[0] == {"keyword": "파이썬", "frequency": 5}
    assert json.loads(record.timeline_json)[1] == {"time": "21:30", "description": "쇼핑"}
    assert json.loads(record.summary_text_json) == ["셋째 문장", "첫째 문장", "둘째 문장"]
    assert json.loads(record.category_percentages_json) == [
        {"category": "뉴스, 정보 탐색", "percentage": 75},
        {"category": "쇼핑", "percentage": 25},
    ]
    # stored readable, not \u-escaped
    assert "파이썬" in record.top_keywords_json


def test_to_dict_shape():
    data = _result().to_dict()
    assert data["date"] == "2024-05-01"
    assert data["topKeywords"][0] == {"keyword": "파이썬", "frequency": 5}
    assert data["dailyTimeline"][0] == {"time": "09:00", "description": "뉴스 읽기"}
    assert data["summaryText"] == ["셋째 문장", "첫째 문장", "둘째 문장"]
    assert data["activityStats"] == {
        "totalUsageTimeMinutes": 40,
        "activityProportions": [
            {"category": "뉴스, 정보 탐색", "percentage": 75},
            {"category": "쇼핑", "percentage": 25},
        ],
    }
