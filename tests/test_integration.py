"""
Integration tests for the FACT-G API.

Tests the complete request flow through the FastAPI app.
"""

import pytest
from fastapi.testclient import TestClient

from main import app


# Test client
client = TestClient(app)


QUESTIONS = [
    {"FactGCategoryId": "FGC_0001", "FactGCategoryName": "Physical well-being",
     "FactGQuestionId": "GP1", "FactGQuestion": "I have a lack of energy", "TypeOfQuestion": "+"},
    {"FactGCategoryId": "FGC_0001", "FactGCategoryName": "Physical well-being",
     "FactGQuestionId": "GP2", "FactGQuestion": "I have nausea", "TypeOfQuestion": "+"},
    {"FactGCategoryId": "FGC_0001", "FactGCategoryName": "Physical well-being",
     "FactGQuestionId": "GP3", "FactGQuestion": "I have trouble meeting needs", "TypeOfQuestion": "+"},
    {"FactGCategoryId": "FGC_0003", "FactGCategoryName": "Emotional well-being",
     "FactGQuestionId": "GE1", "FactGQuestion": "I feel sad", "TypeOfQuestion": "+"},
    {"FactGCategoryId": "FGC_0003", "FactGCategoryName": "Emotional well-being",
     "FactGQuestionId": "GE2", "FactGQuestion": "I am satisfied with coping", "TypeOfQuestion": "-"},
]


class TestHealthEndpoint:
    """Tests for health endpoint."""

    def test_health_returns_ok(self):
        """Health endpoint should return healthy status."""
        response = client.get("/factg/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["services"]["store"] in ("configured", "unconfigured")

    def test_root(self):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/factg/health"


class TestScoreEndpoint:
    """Tests for POST /factg/score."""

    def test_scenario_total(self):
        """Physical [4, 4, 2] and Emotional [2, unset] give 10 + 4 = 14."""
        response = client.post("/factg/score", json={
            "questions": QUESTIONS,
            "answers": {"GP1": 4, "GP2": 4, "GP3": "2", "GE1": 2, "GE2": "x"},
        })
        assert response.status_code == 200

        data = response.json()
        assert data["scores"] == {"PWB": 10, "SWB": 0, "EWB": 4, "FWB": 0, "TOTAL": 14}
        assert [s["short_code"] for s in data["subscales"]] == ["P", "E"]
        assert data["answered_items"] == 4
        assert data["total_items"] == 5
        assert data["max_total"] == 20

    def test_empty_catalog_scores_zero(self):
        response = client.post("/factg/score", json={"questions": [], "answers": {}})
        assert response.status_code == 200
        assert response.json()["scores"]["TOTAL"] == 0

    def test_out_of_range_answer_rejected(self):
        response = client.post("/factg/score", json={
            "questions": QUESTIONS,
            "answers": {"GP1": 7},
        })
        assert response.status_code == 422

        data = response.json()
        assert data["error_code"] == "INVALID_RESPONSE_VALUE"
        assert data["details"] == {"item_id": "GP1", "value": 7}

    @pytest.mark.parametrize("value", ["7", "-1", " 5 "])
    def test_out_of_range_string_answer_rejected(self, value):
        """A stringified integer outside 0-4 is an error, not an unanswered item."""
        response = client.post("/factg/score", json={
            "questions": QUESTIONS,
            "answers": {"GP1": value, "GP2": 3},
        })
        assert response.status_code == 422

        data = response.json()
        assert data["error_code"] == "INVALID_RESPONSE_VALUE"
        assert data["details"]["item_id"] == "GP1"

    def test_boolean_answer_rejected(self):
        """JSON true is not coerced to 1."""
        response = client.post("/factg/score", json={
            "questions": QUESTIONS,
            "answers": {"GP1": True},
        })
        assert response.status_code == 422

    def test_unknown_item_rejected(self):
        response = client.post("/factg/score", json={
            "questions": QUESTIONS,
            "answers": {"GX9": 2},
        })
        assert response.status_code == 422
        assert response.json()["error_code"] == "UNKNOWN_ITEM"

    def test_missing_fields_returns_422(self):
        """Missing required fields should return 422."""
        response = client.post("/factg/score", json={})
        assert response.status_code == 422


class TestSubmissionEndpoint:
    """Tests for POST /factg/submission."""

    def test_insert_payload(self):
        response = client.post("/factg/submission", json={
            "questions": QUESTIONS,
            "answers": {"GP1": 3, "GE2": 0},
            "participant_id": "42",
            "created_date": "2025-09-12",
        })
        assert response.status_code == 200

        data = response.json()
        assert data["operation"] == "insert"
        assert data["record_id"] is None

        payload = data["payload"]
        assert payload["StudyId"] == "CS-0001"
        assert payload["ParticipantId"] == "42"
        assert payload["SessionNo"] == "SessionNo-1"
        assert payload["CreatedBy"] == "UID-1"
        assert payload["CreatedDate"] == "2025-09-12"
        assert [row["ScaleValue"] for row in payload["FactGData"]] == ["3", "x", "x", "x", "0"]
        assert payload["FactGData"][3]["FactGCategoryId"] == "FGC_0003"

        # GE2 reverse answered 0 scores 4: 4 * 2 / 1 = 8
        assert data["scores"]["EWB"] == 8
        assert data["scores"]["PWB"] == 9

    def test_update_with_record_id(self):
        response = client.post("/factg/submission", json={
            "questions": QUESTIONS,
            "answers": {"GP1": 1},
            "participant_id": "42",
            "kind": "weekly",
            "record_id": "REC-5",
        })
        assert response.status_code == 200

        data = response.json()
        assert data["operation"] == "update"
        assert data["record_id"] == "REC-5"

    def test_no_responses_rejected(self):
        response = client.post("/factg/submission", json={
            "questions": QUESTIONS,
            "answers": {"GP1": "x"},
            "participant_id": "42",
        })
        assert response.status_code == 422

        data = response.json()
        assert data["error_code"] == "NO_RESPONSES_ENTERED"
        assert data["details"]["flagged_items"] == ["GP1", "GP2", "GP3", "GE1", "GE2"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
