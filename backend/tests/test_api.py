"""Tests for the tool catalog and invocation endpoints and the health check."""
from fastapi.testclient import TestClient

from orchestrator.main import app

client = TestClient(app)


class TestHealth:

    def test_health_check(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestToolEndpoints:

    def test_list_tools(self):
        response = client.get("/api/tools")
        assert response.status_code == 200
        tools = response.json()["tools"]
        assert [t["name"] for t in tools] == [
            "calculate",
            "get_current_time",
            "validate_email",
            "text_length_analysis",
        ]
        calculate = tools[0]
        assert calculate["parameters"]["required"] == ["operation", "a"]
        assert set(calculate["parameters"]["properties"]) == {"operation", "a", "b"}

    def test_invoke_calculate(self):
        response = client.post("/api/tools/calculate", json={"operation": "power", "a": 2, "b": 10})
        assert response.status_code == 200
        assert response.json() == {"operation": "power", "a": 2.0, "result": 1024.0}

    def test_divide_by_zero(self):
        response = client.post("/api/tools/calculate", json={"operation": "divide", "a": 1, "b": 0})
        assert response.status_code == 400
        body = response.json()
        assert body["kind"] == "semantic_rejection"
        assert "result" not in body

    def test_malformed_argument(self):
        response = client.post("/api/tools/validate_email", json={"email": 12345})
        assert response.status_code == 400
        assert response.json() == {"error": "email parameter must be a string", "kind": "malformed_argument"}

    def test_unknown_function(self):
        response = client.post("/api/tools/nonexistent_fn", json={})
        assert response.status_code == 404
        assert response.json() == {"error": "Unknown function: nonexistent_fn", "kind": "unknown_operator"}

    def test_invoke_without_body(self):
        response = client.post("/api/tools/get_current_time")
        assert response.status_code == 200
        body = response.json()
        assert body["timezone"] == "UTC"
        assert body["iso8601"].endswith("+00:00")

    def test_invalid_timezone(self):
        response = client.post("/api/tools/get_current_time", json={"timezone": "Nowhere/Special"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid timezone: Nowhere/Special"

    def test_text_analysis(self):
        response = client.post("/api/tools/text_length_analysis", json={"text": "Hi! Bye?"})
        assert response.status_code == 200
        assert response.json()["sentence_count"] == 2
        assert response.json()["word_count"] == 2

    def test_non_finite_operand_in_raw_json(self):
        """1e400 parses to infinity; it must come back as an error payload, not a server error."""
        response = client.post(
            "/api/tools/calculate",
            content=b'{"operation": "power", "a": 1e400, "b": 0}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "parameter 'a' must be a finite number", "kind": "malformed_argument"}

    def test_array_body(self):
        response = client.post("/api/tools/calculate", json=[1, 2])
        assert response.status_code == 400
        assert response.json() == {"error": "arguments must be an object", "kind": "malformed_argument"}

    def test_invalid_json_body(self):
        response = client.post(
            "/api/tools/calculate",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["kind"] == "malformed_argument"
        assert body["error"].startswith("Invalid request body")
        assert "detail" not in body
