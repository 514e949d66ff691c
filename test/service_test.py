import logging

from fastapi.testclient import TestClient

from models.schema import WeeklyStats
from service.app import app, log_budget_status

client = TestClient(app)

payload = {
    "employees": [
        {"id": "1", "name": "Ana", "hourlyRate": 15, "overtimeRule": "CALIFORNIA", "maxHoursPerWeek": 40},
        {"id": 2, "name": "Ben", "hourlyRate": 20},
    ],
    "shifts": [
        {"id": "s1", "employeeId": "1", "dayIndex": 0, "startTime": "08", "endTime": "18", "role": "Cook"},
        {"id": "s2", "employeeId": "2", "dayIndex": 6, "startTime": "16", "endTime": "00"},
        {"id": "s3", "employeeId": "99", "dayIndex": 1, "startTime": "09", "endTime": "17"},
    ],
    "budget": 300,
}


def test_weekly_payroll():
    response = client.post("/payroll/weekly", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["stats"] == {
        "totalCost": 325.0,
        "totalHours": 18.0,
        "overtimeHours": 2.0,
        "budget": 300.0,
        "overBudget": True,
    }
    assert body["breakdowns"][0] == {"employeeId": "1", "regularHours": 8.0, "overtimeHours": 2.0, "totalCost": 165.0}
    assert body["breakdowns"][1]["employeeId"] == "2"
    assert [d["cost"] for d in body["dailyCosts"]] == [150.0, 0.0, 0.0, 0.0, 0.0, 0.0, 160.0]


def test_weekly_payroll_default_budget():
    response = client.post("/payroll/weekly", json={"employees": payload["employees"], "shifts": []})
    assert response.status_code == 200
    assert response.json()["stats"]["budget"] == 3500
    assert response.json()["stats"]["totalCost"] == 0


def test_weekly_payroll_rejects_bad_body():
    response = client.post("/payroll/weekly", json={"employees": "nobody"})
    assert response.status_code == 422


def test_compliance_summary():
    response = client.post("/payroll/compliance-summary", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["employees"] == ["Ana: $15/hr, CALIFORNIA", "Ben: $20/hr, STANDARD"]
    assert body["shifts"][2] == "Tue 09-17: Unknown (8h, Staff)"
    assert body["costAnalysis"]["regularCost"] == 280.0
    assert body["costAnalysis"]["overtimeCost"] == 45.0
    assert body["costAnalysis"]["budgetVariance"] == 25.0


def test_sample_payroll():
    response = client.get("/payroll/sample")
    assert response.status_code == 200
    assert response.json()["stats"]["totalCost"] == 836.0


def test_log_budget_status(caplog):
    caplog.set_level(logging.INFO)
    log_budget_status(WeeklyStats(total_cost=120, total_hours=8, overtime_hours=0, budget=100, over_budget=True))
    assert "over budget" in caplog.text
    log_budget_status(WeeklyStats(total_cost=80, total_hours=8, overtime_hours=0, budget=100, over_budget=False))
    assert "within budget" in caplog.text


def test_weekly_payroll_with_unreadable_shift_hours():
    body = {
        "employees": [{"id": "1", "hourlyRate": 15}],
        "shifts": [
            {"employeeId": "1", "dayIndex": 0, "startTime": "09", "endTime": "17"},
            {"employeeId": "1", "dayIndex": 1, "startTime": None, "endTime": "17"},
            {"employeeId": "1", "dayIndex": 2, "startTime": 9.5, "endTime": "17"},
        ],
        "budget": 500,
    }
    response = client.post("/payroll/weekly", json=body)
    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["totalHours"] == 8.0
    assert stats["totalCost"] == 120.0
