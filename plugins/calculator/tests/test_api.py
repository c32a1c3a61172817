from app import create_app
from plugins.calculator.core import SessionStore


def _app():
    return create_app("TestingConfig")


def _client():
    return _app().test_client()


def _new_session(client, **settings) -> str:
    response = client.post("/api/calculator/sessions", json=settings)
    assert response.status_code == 201
    return response.get_json()["data"]["session_id"]


def test_evaluate_without_session_is_one_off():
    app = _app()
    client = app.test_client()
    response = client.post("/api/calculator/evaluate", json={"expression": "2+3*4"})
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    data = payload["data"]
    assert data["session_id"] is None
    assert len(app.extensions.get("calculator_sessions") or ()) == 0
    assert data["result"] == "14.000000000000000"
    assert data["display"] == "14"
    assert data["value"] == 14.0
    assert data["postfix"] == ["2", "3", "4", "*", "+"]
    assert data["warnings"]["messages"] == []


def test_session_settings_are_applied():
    client = _client()
    response = client.post(
        "/api/calculator/sessions",
        json={"precision": 2, "result_precision": 1, "degree": True},
    )
    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["settings"] == {"precision": 2, "result_precision": 1, "degree": True}

    evaluated = client.post(
        "/api/calculator/evaluate",
        json={"expression": "sin(90)", "session_id": data["session_id"]},
    )
    assert evaluated.get_json()["data"]["value"] == 1.0


def test_variables_persist_within_a_session():
    client = _client()
    session_id = _new_session(client)

    assigned = client.post(
        "/api/calculator/evaluate", json={"expression": "x=5", "session_id": session_id}
    ).get_json()["data"]
    assert assigned["defines_variable"] is True
    assert assigned["result"] is None
    assert assigned["value"] is None

    used = client.post(
        "/api/calculator/evaluate", json={"expression": "x*2", "session_id": session_id}
    ).get_json()["data"]
    assert used["value"] == 10.0

    variables = client.get(f"/api/calculator/sessions/{session_id}/variables")
    assert variables.status_code == 200
    assert variables.get_json()["data"]["variables"] == {"x": 5.0}


def test_sessions_do_not_share_variables():
    client = _client()
    first = _new_session(client)
    second = _new_session(client)
    client.post("/api/calculator/evaluate", json={"expression": "x=5", "session_id": first})
    response = client.post("/api/calculator/evaluate", json={"expression": "x+1", "session_id": second})
    data = response.get_json()["data"]
    assert data["value"] == 1.0
    assert data["warnings"]["invalid_tokens"] == ["x"]


def test_evaluate_reports_warnings():
    client = _client()
    response = client.post("/api/calculator/evaluate", json={"expression": "5/0"})
    warnings = response.get_json()["data"]["warnings"]
    assert warnings["division_by_zero"] is True
    assert warnings["inaccurate"] is True
    assert warnings["messages"] == ["Warning: Division by zero", "Result may be inaccurate"]


def test_delete_session_releases_it():
    client = _client()
    session_id = _new_session(client)
    response = client.delete(f"/api/calculator/sessions/{session_id}")
    assert response.status_code == 200
    assert response.get_json()["data"]["deleted"] is True

    again = client.delete(f"/api/calculator/sessions/{session_id}")
    assert again.status_code == 404
    assert again.get_json()["error"]["code"] == "calculator.session_not_found"


def test_unknown_session_is_not_found():
    client = _client()
    response = client.post(
        "/api/calculator/evaluate", json={"expression": "1+1", "session_id": "missing"}
    )
    assert response.status_code == 404
    assert response.get_json()["success"] is False
    assert client.get("/api/calculator/sessions/missing/variables").status_code == 404


def test_invalid_payloads_are_rejected():
    client = _client()
    for body in ({}, {"expression": "   "}, {"expression": "1", "extra": True}):
        response = client.post("/api/calculator/evaluate", json=body)
        assert response.status_code == 400
        assert response.get_json()["error"]["code"] == "calculator.invalid_request"

    response = client.post("/api/calculator/sessions", json={"precision": 99})
    assert response.status_code == 400
    assert response.get_json()["error"]["details"]


def test_session_limit_is_enforced():
    app = _app()
    app.extensions["calculator_sessions"] = SessionStore(max_sessions=1)
    client = app.test_client()
    _new_session(client)
    response = client.post("/api/calculator/sessions", json={})
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "calculator.session_limit"


def test_postfix_endpoint():
    client = _client()
    response = client.post("/api/calculator/postfix", json={"expression": "(1+2)*3"})
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["infix"] == ["(", "1", "+", "2", ")", "*", "3"]
    assert data["postfix"] == ["1", "2", "+", "3", "*"]


def test_sessionless_evaluations_do_not_consume_the_session_cap():
    app = _app()
    app.extensions["calculator_sessions"] = SessionStore(max_sessions=2)
    client = app.test_client()
    statuses = [
        client.post("/api/calculator/evaluate", json={"expression": "1+1"}).status_code
        for _ in range(10)
    ]
    assert statuses == [200] * 10
    assert len(app.extensions["calculator_sessions"]) == 0
    _new_session(client)


def test_sessionless_assignment_does_not_persist():
    client = _client()
    client.post("/api/calculator/evaluate", json={"expression": "x=5"})
    data = client.post("/api/calculator/evaluate", json={"expression": "x"}).get_json()["data"]
    assert data["value"] == 0.0
    assert data["warnings"]["invalid_tokens"] == ["x"]
