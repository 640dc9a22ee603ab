# tests/core/engine/test_flow_trace.py
"""
Testes do log estruturado de eventos do Flow.

Os testes asseguram que:
- com trace desligado (padrão) nenhum evento é registrado pelo engine
- com trace ligado, início, Steps aplicados, break e fim são registrados
- eventos carregam nome do Flow, nível e timestamp UTC
- falhas de Steps não são registradas
- `log` está disponível para Steps via `this_flow`
"""

import pytest

try:
    from atlas_flow.core.engine.flow import Flow
except Exception as e:  # noqa: BLE001
    Flow = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing Flow engine. Implement:\n"
            "- src/atlas_flow/core/engine/flow.py (Flow.log, Flow.events)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def load_cart():
    return {"items": 2}


def stop(this_flow):
    this_flow.break_()


def _messages(flow):
    return [e["message"] for e in flow.events]


def test_trace_is_disabled_by_default():
    _require_imports()
    flow = Flow([load_cart])
    flow.invoke()
    assert flow.events == []


def test_trace_records_lifecycle_events():
    _require_imports()
    flow = Flow([load_cart], name="checkout", trace=True)
    flow.invoke()

    assert _messages(flow) == ["flow.invoke.start", "flow.step.applied", "flow.invoke.end"]
    applied = flow.events[1]
    assert applied["step"] == "load_cart"
    assert applied["shape"] == "function"
    assert applied["flow"] == "checkout"
    assert applied["level"] == "DEBUG"
    assert flow.events[0]["steps"] == 1


def test_trace_records_break_with_step_label():
    _require_imports()
    flow = Flow([stop, load_cart], trace=True)
    flow.invoke()

    assert _messages(flow) == [
        "flow.invoke.start",
        "flow.step.applied",
        "flow.break",
        "flow.invoke.end",
    ]
    assert flow.events[2]["step"] == "stop"


def test_trace_labels_nested_flow_by_name():
    _require_imports()
    inner = Flow([load_cart], name="inner")
    outer = Flow([inner], name="outer", trace=True)
    outer.invoke()

    applied = [e for e in outer.events if e["message"] == "flow.step.applied"]
    assert len(applied) == 1
    assert applied[0]["step"] == "inner"
    assert applied[0]["shape"] == "nested_flow"
    assert inner.events == []


def test_step_failure_is_not_logged():
    _require_imports()

    def fail():
        raise RuntimeError("boom")

    flow = Flow([fail], trace=True)
    with pytest.raises(RuntimeError):
        flow.invoke()
    assert _messages(flow) == ["flow.invoke.start"]


def test_log_from_inside_step():
    _require_imports()

    def step(this_flow):
        this_flow.log(level="INFO", message="cart loaded", items=2)

    flow = Flow([step], name="checkout")
    flow.invoke()

    assert len(flow.events) == 1
    event = flow.events[0]
    assert event["flow"] == "checkout"
    assert event["level"] == "INFO"
    assert event["message"] == "cart loaded"
    assert event["items"] == 2
    assert event["timestamp"].endswith("+00:00")
