"""Tests for /api/v1/queries routes (compile, inspect)."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from querytpl.core.config import settings
from querytpl.main import app


def test_compile_returns_sql(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "SELECT * FROM t WHERE id = ?d", "args": [42]},
    )
    assert r.status_code == 200
    assert r.json() == {"sql": "SELECT * FROM t WHERE id = 42"}


def test_compile_identifiers_and_arrays(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "INSERT INTO t (?#) VALUES (?a)", "args": [["a", "b"], [1, "x", None]]},
    )
    assert r.status_code == 200
    assert r.json()["sql"] == "INSERT INTO t (`a`, `b`) VALUES (1, 'x', NULL)"


def test_compile_skip_marker_drops_block(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "SELECT * FROM t{ WHERE id = ?}", "args": [{"$skip": True}]},
    )
    assert r.status_code == 200
    assert r.json()["sql"] == "SELECT * FROM t"


def test_compile_keeps_block_without_marker(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "SELECT * FROM t{ WHERE id = ?d}", "args": [5]},
    )
    assert r.json()["sql"] == "SELECT * FROM t WHERE id = 5"


def test_compile_mapping_not_a_marker(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "UPDATE t SET ?a", "args": [{"$skip": True, "name": "x"}]},
    )
    assert r.status_code == 200
    assert r.json()["sql"] == "UPDATE t SET `$skip` = 1, `name` = 'x'"


def test_compile_insufficient_arguments_is_400(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "?d", "args": []},
    )
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail["error"] == "insufficient_arguments"
    assert "?d" in detail["message"]


def test_compile_type_mismatch_is_400(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "?a", "args": [42]},
    )
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "type_mismatch"


def test_compile_missing_template_is_422(client: TestClient) -> None:
    r = client.post(f"{settings.API_V1_STR}/queries/compile", json={"args": []})
    assert r.status_code == 422
    assert "template" in r.json()["detail"]


def test_inspect_lists_placeholders_and_warnings(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/inspect",
        json={"template": "SELECT ?# FROM t WHERE a = '?'{ AND b = ?d"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["placeholders"] == ["?#", "?", "?d"]
    kinds = [w["kind"] for w in data["warnings"]]
    assert kinds == ["placeholder_in_literal", "unmatched_brace"]


def test_unhandled_error_is_500(caplog: pytest.LogCaptureFixture) -> None:
    with patch(
        "querytpl.api.routes.queries.parse_placeholders", side_effect=RuntimeError("boom")
    ):
        with TestClient(app, raise_server_exceptions=False) as c:
            r = c.post(f"{settings.API_V1_STR}/queries/inspect", json={"template": "x"})
    assert r.status_code == 500
    assert r.json()["detail"].startswith("Internal server error")
    assert "RuntimeError in inspect_template" in caplog.text


def test_compile_float_overflow_is_400(client: TestClient) -> None:
    r = client.post(
        f"{settings.API_V1_STR}/queries/compile",
        json={"template": "SELECT ?f", "args": [10**400]},
    )
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "type_mismatch"
