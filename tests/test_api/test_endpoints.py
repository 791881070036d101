"""Tests for the HTTP endpoints."""

from __future__ import annotations

import json

import pytest

from canvas_agent.engine.heuristics import NO_INTENT_NOTE
from canvas_agent.stream.events import FAILURE_NOTE


def _agent_body(message, shapes=(), selection=()):
    return {
        "message": message,
        "viewportSize": {"w": 1200, "h": 800},
        "visibleCenter": {"x": 600, "y": 400},
        "shapes": list(shapes),
        "selectionIds": list(selection),
    }


# Integers that overflow a float, spliced in as raw JSON text.
_HUGE = "1" + "0" * 400
_ROTATE_A1 = '{"tool": "rotateShape", "args": {"id": "a1", "by": 10}}'
_HUGE_ADD_PLAN = (
    '{"steps": [{"tool": "addShape", "args": {"type": "geo", "x": 0, "y": 0, "w": %s, "h": 10}}, %s]}'
    % (_HUGE, _ROTATE_A1)
)
_HUGE_RESIZE_PLAN = (
    '{"steps": [{"tool": "resizeShape", "args": {"id": "a1", "to": {"w": %s, "h": 10}}}, %s]}'
    % (_HUGE, _ROTATE_A1)
)


# ---------------------------------------------------------------------------
# Health / meta
# ---------------------------------------------------------------------------

class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["llm_configured"] is False

    def test_health_with_key(self, model_client):
        assert model_client.get("/api/health").json()["llm_configured"] is True

    def test_prompts(self, client):
        data = client.get("/api/prompts").json()
        assert set(data) == {"agent", "transform", "layout", "create"}


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------

class TestInvalidRequest:
    @pytest.mark.parametrize(
        "path, body",
        [
            ("/api/shape-llm", {"viewport": {"x": 0, "y": 0, "w": 100, "h": 100}}),
            ("/api/shape-llm", {"message": "", "viewport": {"x": 0, "y": 0, "w": 100, "h": 100}}),
            ("/api/canvas-agent/transform", {"message": "move", "viewport": {"x": 0, "y": 0, "w": 9, "h": 9}, "shapes": []}),
            ("/api/canvas-agent/layout", {"message": "row", "viewport": {"x": 0, "y": 0, "w": 9, "h": 9}, "shapes": [], "hints": {"gapPx": 0}}),
            ("/api/canvas-agent", {"message": "hi", "viewportSize": {"w": 0, "h": 10}, "visibleCenter": {"x": 0, "y": 0}}),
            ("/api/canvas-agent/stream", {"message": "hi"}),
        ],
    )
    def test_schema_errors(self, client, path, body):
        resp = client.post(path, json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request"}

    def test_body_not_json(self, client):
        resp = client.post("/api/canvas-agent", content=b"move it", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid request"}


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

class TestCreate:
    def test_default_placement(self, client, viewport):
        resp = client.post("/api/shape-llm", json={"message": "add a shape", "viewport": viewport})
        assert resp.status_code == 200
        assert resp.json() == {"x": 500, "y": 340, "w": 200, "h": 120}

    def test_circle_from_message(self, client, viewport):
        data = client.post("/api/shape-llm", json={"message": "add a circle", "viewport": viewport}).json()
        assert (data["w"], data["h"]) == (160, 160)

    def test_model_placement_clamped(self, model_client, fake_llm, viewport):
        fake_llm.reply = '{"x": 1150, "y": -20, "w": 10, "h": 300}'
        data = model_client.post("/api/shape-llm", json={"message": "add a box top right", "viewport": viewport}).json()
        assert data == {"x": 1150, "y": 0, "w": 24, "h": 300}
        assert fake_llm.calls[0][1]["shapeHint"] == "rectangle"


# ---------------------------------------------------------------------------
# Transform
# ---------------------------------------------------------------------------

class TestTransform:
    def test_move_blue_rectangle(self, client, viewport, canvas_shapes):
        resp = client.post("/api/canvas-agent/transform", json={
            "message": "Move the blue rectangle to the center",
            "viewport": viewport,
            "shapes": canvas_shapes,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["action"] == "move"
        assert data["shapeId"] == "a1"
        to = data["move"]["to"]
        assert 300 <= to["x"] <= 900 and 200 <= to["y"] <= 600
        assert "resize" not in data and "rotate" not in data

    def test_resize_circle(self, client, viewport):
        circle = {"id": "c1", "type": "geo", "geo": "ellipse", "bounds": {"x": 10, "y": 10, "w": 100, "h": 100}}
        data = client.post("/api/canvas-agent/transform", json={
            "message": "Resize the circle to be twice as big",
            "viewport": viewport,
            "shapes": [circle],
        }).json()
        assert data["resize"]["to"] == {"w": 200, "h": 200}

    def test_rotate_text(self, client, viewport, canvas_shapes, text_shape):
        data = client.post("/api/canvas-agent/transform", json={
            "message": "Rotate the text 45 degrees",
            "viewport": viewport,
            "shapes": canvas_shapes + [text_shape],
        }).json()
        assert data["shapeId"] == "t1"
        assert data["rotate"] == {"by": 45, "unit": "deg"}

    def test_client_hints(self, client, viewport, canvas_shapes):
        data = client.post("/api/canvas-agent/transform", json={
            "message": "do it",
            "viewport": viewport,
            "hints": {"action": "rotate", "shape": "ellipse"},
            "shapes": canvas_shapes,
        }).json()
        assert data["action"] == "rotate"
        assert data["shapeId"] == "a2"

    def test_model_result_used(self, model_client, fake_llm, viewport, canvas_shapes):
        fake_llm.reply = '{"action": "rotate", "shapeId": "a2", "rotate": {"to": 180, "unit": "deg"}}'
        data = model_client.post("/api/canvas-agent/transform", json={
            "message": "Flip the ellipse upside down",
            "viewport": viewport,
            "shapes": canvas_shapes,
        }).json()
        assert data == {"action": "rotate", "shapeId": "a2", "rotate": {"to": 180, "unit": "deg"}}

    def test_model_unknown_shape_falls_back(self, model_client, fake_llm, viewport, canvas_shapes):
        fake_llm.reply = '{"action": "move", "shapeId": "zzz", "move": {"to": {"x": 1, "y": 1}}}'
        data = model_client.post("/api/canvas-agent/transform", json={
            "message": "Move the blue rectangle to the center",
            "viewport": viewport,
            "shapes": canvas_shapes,
        }).json()
        assert data["shapeId"] == "a1"
        assert data["move"]["to"] == {"x": 600, "y": 400}


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

class TestLayout:
    def test_row_evenly(self, client, viewport, row_shapes):
        resp = client.post("/api/canvas-agent/layout", json={
            "message": "Arrange these shapes in a horizontal row, space them evenly",
            "viewport": viewport,
            "shapes": row_shapes,
        })
        assert resp.status_code == 200
        moves = resp.json()["moves"]
        assert len(moves) == 3
        widths = {s["id"]: s["bounds"]["w"] for s in row_shapes}
        gaps = [b["to"]["x"] - (a["to"]["x"] + widths[a["id"]]) for a, b in zip(moves, moves[1:])]
        assert gaps[0] == gaps[1]

    def test_column_spacing(self, client, viewport, column_shapes):
        moves = client.post("/api/canvas-agent/layout", json={
            "message": "Stack them vertically with spacing 30",
            "viewport": viewport,
            "shapes": column_shapes,
        }).json()["moves"]
        ys = [m["to"]["y"] for m in moves]
        for a, b in zip(ys, ys[1:]):
            assert abs((b - a) - 110) <= 2

    def test_hints_override_message(self, client, viewport, column_shapes):
        moves = client.post("/api/canvas-agent/layout", json={
            "message": "tidy up",
            "viewport": viewport,
            "hints": {"axis": "column", "gapPx": 10},
            "shapes": column_shapes,
        }).json()["moves"]
        assert [m["to"]["y"] for m in moves] == [200, 290, 380]

    def test_selection(self, client, viewport, row_shapes):
        moves = client.post("/api/canvas-agent/layout", json={
            "message": "Arrange the selected in a row",
            "viewport": viewport,
            "shapes": row_shapes,
            "selectionIds": ["s2"],
        }).json()["moves"]
        assert moves == []

    def test_model_garbage_falls_back(self, model_client, fake_llm, viewport, column_shapes):
        fake_llm.reply = "Sorry, I can't help with layouts."
        moves = model_client.post("/api/canvas-agent/layout", json={
            "message": "Stack them vertically with spacing 30",
            "viewport": viewport,
            "shapes": column_shapes,
        }).json()["moves"]
        assert [m["to"]["y"] for m in moves] == [200, 310, 420]

    def test_model_deeply_nested_reply_falls_back(self, model_client, fake_llm, viewport, column_shapes):
        fake_llm.reply = '{"moves": ' + "[" * 200_000 + "]" * 200_000 + "}"
        resp = model_client.post("/api/canvas-agent/layout", json={
            "message": "Stack them vertically with spacing 30",
            "viewport": viewport,
            "shapes": column_shapes,
        })
        assert resp.status_code == 200
        assert [m["to"]["y"] for m in resp.json()["moves"]] == [200, 310, 420]


# ---------------------------------------------------------------------------
# Orchestrated plan (JSON)
# ---------------------------------------------------------------------------

class TestAgentPlan:
    def test_create(self, client):
        data = client.post("/api/canvas-agent", json=_agent_body("Create a red rectangle")).json()
        assert data["steps"] == [{
            "tool": "addShape",
            "args": {"type": "geo", "geo": "rectangle", "x": 500, "y": 340, "w": 200, "h": 120, "color": "red"},
        }]
        assert "say" not in data

    def test_no_intent(self, client):
        data = client.post("/api/canvas-agent", json=_agent_body("hello")).json()
        assert data == {"steps": [], "say": NO_INTENT_NOTE}

    def test_model_plan_steps_validated(self, model_client, fake_llm, canvas_shapes):
        fake_llm.reply = json.dumps({"steps": [
            {"tool": "addShape", "args": {"type": "geo", "x": 0, "y": 0, "w": "abc", "h": 5}},
            {"tool": "resizeShape", "args": {"id": "a1", "to": {"w": 4000, "h": 2}}},
        ]})
        data = model_client.post("/api/canvas-agent", json=_agent_body("make it huge", canvas_shapes)).json()
        assert data["steps"] == [{"tool": "resizeShape", "args": {"id": "a1", "to": {"w": 1200, "h": 8}}}]
        assert fake_llm.calls[0][0] == "agent"

    def test_oversized_model_number_drops_only_that_step(self, model_client, fake_llm, canvas_shapes):
        fake_llm.reply = _HUGE_RESIZE_PLAN
        resp = model_client.post("/api/canvas-agent", json=_agent_body("make it huge", canvas_shapes))
        assert resp.status_code == 200
        assert resp.json()["steps"] == [{"tool": "rotateShape", "args": {"id": "a1", "by": 10, "unit": "deg"}}]


# ---------------------------------------------------------------------------
# Orchestrated plan (SSE)
# ---------------------------------------------------------------------------

class TestAgentStream:
    def test_headers_and_framing(self, client, sse):
        resp = client.post("/api/canvas-agent/stream", json=_agent_body("Create a red rectangle"))
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/event-stream")
        assert resp.headers["cache-control"] == "no-cache"
        assert resp.text.endswith("event: done\ndata: {}\n\n")
        events = sse(resp.text)
        assert [kind for kind, _ in events] == ["tool.addShape", "done"]
        assert events[0][1]["color"] == "red"

    def test_no_intent(self, client, sse):
        events = sse(client.post("/api/canvas-agent/stream", json=_agent_body("hello")).text)
        assert events == [("message", {"text": NO_INTENT_NOTE}), ("done", {})]

    def test_steps_in_production_order(self, client, sse, canvas_shapes):
        body = _agent_body("Move the red ellipse and rotate it 30 degrees", canvas_shapes)
        events = sse(client.post("/api/canvas-agent/stream", json=body).text)
        assert [kind for kind, _ in events] == ["tool.moveShapes", "tool.rotateShape", "done"]

    def test_model_plan_streamed(self, model_client, fake_llm, sse, canvas_shapes):
        fake_llm.reply = json.dumps({
            "steps": [
                {"tool": "addShape", "args": {"idHint": "n1", "type": "geo", "geo": "diamond", "x": 10, "y": 10, "w": 50, "h": 50}},
                {"tool": "moveShapes", "args": {"moves": [{"id": "n1", "by": {"dx": 5, "dy": 0}}]}},
            ],
            "say": "Added a diamond.",
        })
        events = sse(model_client.post("/api/canvas-agent/stream", json=_agent_body("add a diamond", canvas_shapes)).text)
        assert [kind for kind, _ in events] == ["message", "tool.addShape", "tool.moveShapes", "done"]
        assert events[0][1] == {"text": "Added a diamond."}

    def test_model_unknown_id_falls_back(self, model_client, fake_llm, sse, canvas_shapes):
        fake_llm.reply = json.dumps({"steps": [{"tool": "deleteShapes", "args": {"ids": ["ghost"]}}]})
        events = sse(model_client.post("/api/canvas-agent/stream", json=_agent_body("Rotate the square", canvas_shapes)).text)
        assert events[0] == ("tool.rotateShape", {"id": "a1", "by": 45, "unit": "deg"})

    def test_model_timeout_falls_back(self, model_client, fake_llm, sse, canvas_shapes):
        fake_llm.reply = TimeoutError()
        events = sse(model_client.post("/api/canvas-agent/stream", json=_agent_body("Rotate the square", canvas_shapes)).text)
        assert [kind for kind, _ in events] == ["tool.rotateShape", "done"]

    def test_oversized_model_number_drops_only_that_step(self, model_client, fake_llm, sse, canvas_shapes):
        fake_llm.reply = _HUGE_ADD_PLAN
        events = sse(model_client.post("/api/canvas-agent/stream", json=_agent_body("add a box", canvas_shapes)).text)
        assert events == [("tool.rotateShape", {"id": "a1", "by": 10, "unit": "deg"}), ("done", {})]

    def test_internal_failure(self, client, sse, monkeypatch):
        async def broken(req, settings):
            raise RuntimeError("boom")

        monkeypatch.setattr("canvas_agent.api.agent.resolve_agent_plan", broken)
        events = sse(client.post("/api/canvas-agent/stream", json=_agent_body("anything")).text)
        assert events == [("message", {"text": FAILURE_NOTE}), ("done", {})]
