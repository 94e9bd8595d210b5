"""Tests for the FastAPI REST endpoints."""

from __future__ import annotations

import math
import threading

import pytest
from fastapi.testclient import TestClient

from app import create_app
from bigint import BigInt
from combinatorics import CATALOGUE
from models import MAX_LITERAL_LENGTH
from store import JobStore


@pytest.fixture
def client(store):
    app = create_app(store=store)
    return TestClient(app)


# ---------------------------------------------------------------------------
# POST /arithmetic
# ---------------------------------------------------------------------------

class TestArithmeticEndpoint:

    @pytest.mark.parametrize(
        "op, left, right, result",
        [
            ("add", "5", "5", "10"),
            ("sub", "3", "10", "-7"),
            ("mul", "-12", "12", "-144"),
            ("div", "-7", "2", "-3"),
            ("mod", "-7", "2", "-1"),
        ],
    )
    def test_operations(self, client, op, left, right, result):
        resp = client.post("/arithmetic", json={"op": op, "left": left, "right": right})
        assert resp.status_code == 200
        data = resp.json()
        assert data["result"] == result
        assert data["op"] == op
        assert data["digits"] == len(result.lstrip("-"))

    def test_beyond_json_number_range(self, client):
        left = "123456789012345678901234567890"
        right = "987654321098765432109876543210"
        resp = client.post("/arithmetic", json={"op": "mul", "left": left, "right": right})
        assert resp.status_code == 200
        assert resp.json()["result"] == str(int(left) * int(right))

    def test_operands_echoed_canonical(self, client):
        resp = client.post("/arithmetic", json={"op": "add", "left": "007", "right": "-0"})
        data = resp.json()
        assert data["left"] == "7"
        assert data["right"] == "0"
        assert data["result"] == "7"

    def test_malformed_literal_422(self, client):
        resp = client.post("/arithmetic", json={"op": "add", "left": "1.5", "right": "2"})
        assert resp.status_code == 422

    def test_unknown_op_422(self, client):
        resp = client.post("/arithmetic", json={"op": "pow", "left": "1", "right": "2"})
        assert resp.status_code == 422

    @pytest.mark.parametrize("op", ["div", "mod"])
    def test_division_by_zero_400(self, client, op):
        resp = client.post("/arithmetic", json={"op": op, "left": "5", "right": "0"})
        assert resp.status_code == 400
        assert "division by zero" in resp.json()["detail"]


# ---------------------------------------------------------------------------
# POST /compare
# ---------------------------------------------------------------------------

class TestCompareEndpoint:

    @pytest.mark.parametrize(
        "left, right, ignore_sign, result",
        [
            ("-5", "-3", False, -1),
            ("-5", "-3", True, 1),
            ("100", "99", False, 1),
            ("-0", "0", False, 0),
        ],
    )
    def test_compare(self, client, left, right, ignore_sign, result):
        resp = client.post(
            "/compare", json={"left": left, "right": right, "ignore_sign": ignore_sign}
        )
        assert resp.status_code == 200
        assert resp.json()["result"] == result

    def test_malformed_422(self, client):
        resp = client.post("/compare", json={"left": "x", "right": "1"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# /jobs
# ---------------------------------------------------------------------------

class TestJobEndpoints:

    def test_create_returns_202(self, client):
        resp = client.post("/jobs", json={"function": "factorial", "args": [10]})
        assert resp.status_code == 202
        data = resp.json()
        assert data["id"]
        assert data["function"] == "factorial"
        assert data["args"] == [10]

    def test_job_completes(self, client, store):
        resp = client.post("/jobs", json={"function": "combination", "args": [2, 5]})
        job_id = resp.json()["id"]
        store.wait(job_id, timeout=10)

        resp = client.get(f"/jobs/{job_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "succeeded"
        assert data["result"] == "10"
        assert data["progress"] == 1.0

    def test_large_job_result(self, client, store):
        resp = client.post("/jobs", json={"function": "factorial", "args": [60]})
        job_id = resp.json()["id"]
        store.wait(job_id, timeout=10)
        data = client.get(f"/jobs/{job_id}").json()
        assert data["result"] == str(math.factorial(60))
        assert data["digits"] == len(str(math.factorial(60)))

    def test_failed_job_reports_error(self, client, store):
        resp = client.post("/jobs", json={"function": "combination", "args": [9, 3]})
        job_id = resp.json()["id"]
        store.wait(job_id, timeout=10)
        data = client.get(f"/jobs/{job_id}").json()
        assert data["status"] == "failed"
        assert data["error"]

    def test_arity_mismatch_422(self, client):
        resp = client.post("/jobs", json={"function": "power", "args": [2]})
        assert resp.status_code == 422

    def test_unknown_function_422(self, client):
        resp = client.post("/jobs", json={"function": "nope", "args": [2]})
        assert resp.status_code == 422

    def test_get_missing_404(self, client):
        resp = client.get("/jobs/does-not-exist")
        assert resp.status_code == 404
        assert "does-not-exist" in resp.json()["detail"]

    def test_list_jobs(self, client, store):
        assert client.get("/jobs").json() == {"items": [], "total": 0}
        client.post("/jobs", json={"function": "factorial", "args": [3]})
        client.post("/jobs", json={"function": "power", "args": [2, 5]})
        data = client.get("/jobs").json()
        assert data["total"] == 2
        assert [j["function"] for j in data["items"]] == ["power", "factorial"]


# ---------------------------------------------------------------------------
# Request limits
# ---------------------------------------------------------------------------

class TestRequestLimits:

    def test_oversized_literal_422(self, client):
        resp = client.post(
            "/arithmetic",
            json={"op": "mul", "left": "9" * (MAX_LITERAL_LENGTH + 1), "right": "9"},
        )
        assert resp.status_code == 422

    def test_job_argument_out_of_range_422(self, client, store):
        resp = client.post("/jobs", json={"function": "factorial", "args": [1000000000]})
        assert resp.status_code == 422
        assert store.count() == 0

    def test_too_many_squarings_422(self, client):
        resp = client.post("/jobs", json={"function": "square_repeatedly", "args": [2, 40]})
        assert resp.status_code == 422

    def test_full_store_503(self, monkeypatch):
        release = threading.Event()

        def held(n, progress=None):
            release.wait(10)
            return BigInt(n)

        monkeypatch.setitem(CATALOGUE, "factorial", (held, 1))
        client = TestClient(create_app(store=JobStore(max_jobs=1)))
        try:
            assert client.post("/jobs", json={"function": "factorial", "args": [1]}).status_code == 202
            resp = client.post("/jobs", json={"function": "factorial", "args": [2]})
            assert resp.status_code == 503
            assert "full" in resp.json()["detail"]
        finally:
            release.set()
