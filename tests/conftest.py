"""Shared test fixtures."""

from __future__ import annotations

import copy
import json

import pytest
from fastapi.testclient import TestClient

from canvas_agent.config import Settings
from canvas_agent.dependencies import get_settings
from canvas_agent.main import app


VIEWPORT = {"x": 0, "y": 0, "w": 1200, "h": 800}

BLUE_RECT = {
    "id": "a1", "type": "geo", "geo": "rectangle", "color": "blue",
    "bounds": {"x": 100, "y": 100, "w": 200, "h": 120},
}
RED_ELLIPSE = {
    "id": "a2", "type": "geo", "geo": "ellipse", "color": "red",
    "bounds": {"x": 600, "y": 120, "w": 160, "h": 160},
}
HELLO_TEXT = {
    "id": "t1", "type": "text", "text": "Hello",
    "bounds": {"x": 100, "y": 100, "w": 300, "h": 80},
}

# Three shapes spread along x with uneven gaps
ROW_SHAPES = [
    {"id": "s1", "type": "geo", "bounds": {"x": 100, "y": 200, "w": 100, "h": 80}},
    {"id": "s2", "type": "geo", "bounds": {"x": 360, "y": 220, "w": 120, "h": 80}},
    {"id": "s3", "type": "geo", "bounds": {"x": 700, "y": 210, "w": 80, "h": 80}},
]

# Three 80px-tall shapes loosely stacked down the page
COLUMN_SHAPES = [
    {"id": "a", "type": "geo", "bounds": {"x": 400, "y": 200, "w": 100, "h": 80}},
    {"id": "b", "type": "geo", "bounds": {"x": 420, "y": 300, "w": 100, "h": 80}},
    {"id": "c", "type": "geo", "bounds": {"x": 440, "y": 420, "w": 100, "h": 80}},
]


def parse_sse(body: str) -> list[tuple[str, dict]]:
    """Split an SSE body into (event, data) pairs."""
    events = []
    for frame in body.strip().split("\n\n"):
        kind, data = None, None
        for line in frame.splitlines():
            if line.startswith("event: "):
                kind = line[len("event: "):]
            elif line.startswith("data: "):
                data = json.loads(line[len("data: "):])
        events.append((kind, data))
    return events


class FakeLLM:
    """Stand-in for client.complete_json. Set ``reply`` to a string or an exception."""

    def __init__(self) -> None:
        self.reply: str | BaseException = ""
        self.calls: list[tuple[str, dict]] = []

    async def __call__(self, settings, task, system, user):
        self.calls.append((task, json.loads(user)))
        if isinstance(self.reply, BaseException):
            raise self.reply
        return self.reply


@pytest.fixture
def viewport() -> dict:
    return dict(VIEWPORT)


@pytest.fixture
def canvas_shapes() -> list[dict]:
    return copy.deepcopy([BLUE_RECT, RED_ELLIPSE])


@pytest.fixture
def row_shapes() -> list[dict]:
    return copy.deepcopy(ROW_SHAPES)


@pytest.fixture
def column_shapes() -> list[dict]:
    return copy.deepcopy(COLUMN_SHAPES)


@pytest.fixture
def text_shape() -> dict:
    return copy.deepcopy(HELLO_TEXT)


@pytest.fixture
def heuristic_settings() -> Settings:
    return Settings(anthropic_api_key="", _env_file=None)


@pytest.fixture
def model_settings() -> Settings:
    return Settings(anthropic_api_key="test-key", llm_timeout_s=1.0, _env_file=None)


@pytest.fixture
def fake_llm(monkeypatch) -> FakeLLM:
    fake = FakeLLM()
    monkeypatch.setattr("canvas_agent.llm.client.complete_json", fake)
    return fake


def _client_for(settings: Settings):
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(heuristic_settings, fake_llm):
    yield from _client_for(heuristic_settings)


@pytest.fixture
def model_client(model_settings, fake_llm):
    yield from _client_for(model_settings)


@pytest.fixture
def sse():
    return parse_sse
