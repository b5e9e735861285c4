from __future__ import annotations

import runpy
from pathlib import Path

import requests

MODULE_GLOBALS = runpy.run_path(Path(__file__).resolve().parents[2] / "scripts" / "insert_sample_data.py")
MAIN = MODULE_GLOBALS["main"]
SAMPLES = MODULE_GLOBALS["SAMPLE_NOMINATIONS"]


class FakeResponse:
    def __init__(self, status_code: int, payload=None, reason: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


def _fake_get(stats=None, healthy=True):
    def _get(url, timeout):
        if url.endswith("/health"):
            return FakeResponse(200 if healthy else 503, {"status": "ok"})
        return FakeResponse(200, {"success": True, "data": stats})
    return _get


def test_samples_are_valid_nominations():
    from nomination_service.validation import validate_nomination

    assert len(SAMPLES) == 10
    assert len({s["email"] for s in SAMPLES}) == len(SAMPLES)
    for sample in SAMPLES:
        assert validate_nomination(sample).ok, sample["name"]


def test_insert_counts_created_and_duplicates(monkeypatch, capsys):
    posted = []

    def _post(url, json, timeout):
        posted.append((url, json["email"]))
        if json["name"] == "Bob Smith":
            return FakeResponse(409, {"success": False, "message": "Email already exists"})
        return FakeResponse(201, {"success": True})

    stats = {"total_nominations": 10, "by_domain": {"Web Dev": 2}, "by_gender": {}}
    monkeypatch.setattr(requests, "post", _post)
    monkeypatch.setattr(requests, "get", _fake_get(stats))

    exit_code = MAIN(["--api-url", "http://svc:9000/", "--delay", "0"])

    assert exit_code == 0
    assert len(posted) == 10
    assert all(url == "http://svc:9000/api/nominations/" for url, _ in posted)
    out = capsys.readouterr().out
    assert "9 added, 1 already present, 0 failed" in out
    assert "Skipped Bob Smith: Email already exists" in out
    assert "Total nominations: 10" in out


def test_insert_reports_failures(monkeypatch, capsys):
    def _post(url, json, timeout):
        if json["domain"] == "UI/UX":
            raise requests.ConnectionError("connection refused")
        return FakeResponse(500, None, reason="Internal Server Error")

    monkeypatch.setattr(requests, "post", _post)
    monkeypatch.setattr(requests, "get", _fake_get())

    exit_code = MAIN(["--delay", "0"])

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "0 added, 0 already present, 10 failed" in out
    assert "connection refused" in out


def test_server_down_aborts(monkeypatch, capsys):
    def _post(url, json, timeout):  # pragma: no cover - must not be reached
        raise AssertionError("should not post when the server is down")

    def _get(url, timeout):
        raise requests.ConnectionError("no route to host")

    monkeypatch.setattr(requests, "post", _post)
    monkeypatch.setattr(requests, "get", _get)

    assert MAIN(["--api-url", "http://down:1"]) == 1
    assert "not reachable" in capsys.readouterr().err
