"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List, Optional

from ttexport.config import ExportConfig
from ttexport.logger import get_logger, reset_logger


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload: Any = None, json_error: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Returns queued responses (or raises queued exceptions) in order."""

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


def candidate(
    cid: str,
    first: Optional[str] = "Ada",
    last: Optional[str] = "Lovelace",
    email: Optional[str] = "ada@example.com",
    job_app_ids: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build a JSON:API candidate resource."""
    attributes = {}
    if first is not None:
        attributes["first-name"] = first
    if last is not None:
        attributes["last-name"] = last
    if email is not None:
        attributes["email"] = email
    obj = {"id": cid, "type": "candidates", "attributes": attributes}
    if job_app_ids is not None:
        obj["relationships"] = {
            "job-applications": {
                "data": [{"id": j, "type": "job-applications"} for j in job_app_ids]
            }
        }
    return obj


def job_application(jid: str, created_at: str) -> Dict[str, Any]:
    """Build a JSON:API job-application resource."""
    return {"id": jid, "type": "job-applications", "attributes": {"created-at": created_at}}


def page_payload(
    candidates: List[Dict[str, Any]],
    included: Optional[List[Dict[str, Any]]] = None,
    next_link: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a candidates listing page."""
    payload: Dict[str, Any] = {"data": candidates}
    if included is not None:
        payload["included"] = included
    if next_link is not None:
        payload["links"] = {"next": next_link}
    if meta is not None:
        payload["meta"] = meta
    return payload


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Fresh global logger per test, logging to a temp dir only."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def config() -> ExportConfig:
    """Config with a usable key and a fake host."""
    return ExportConfig(api_key="secret-token", base_url="https://api.example.test/v1")


@pytest.fixture
def sleeps() -> List[float]:
    """Collects backoff waits instead of sleeping."""
    return []


@pytest.fixture
def two_page_responses() -> List[FakeResponse]:
    """Two pages: a candidate with two applications, then one with none."""
    first = page_payload(
        [candidate("1", "Ada", "Lovelace", "ada@example.com", job_app_ids=["a", "b"])],
        included=[
            job_application("a", "2024-01-01"),
            job_application("b", "2024-01-02"),
        ],
        next_link="https://api.example.test/v1/candidates?page[number]=2",
        meta={"record_count": 2, "page_count": 2},
    )
    second = page_payload(
        [candidate("2", "Grace", "Hopper", "grace@example.com")],
    )
    return [FakeResponse(200, first), FakeResponse(200, second)]
