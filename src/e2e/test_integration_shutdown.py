from pathlib import Path
import pytest
import hit.config as CFG
from hit.engine import Engine
from hit.models import InputPair

@pytest.mark.e2e
def test_build_requires_roots():
    eng = Engine()
    try:
        with pytest.raises(ValueError):
            eng.build(roots=[])
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_engine_unusable_after_shutdown():
    eng = Engine()
    eng.add([InputPair("hello there", "h1")])
    assert eng.lookup("hello") is not None
    eng.shutdown()
    with pytest.raises(RuntimeError):
        eng.lookup("hello")
    with pytest.raises(RuntimeError):
        eng.add([("more", "h2")])

@pytest.mark.e2e
def test_rejected_batch_stores_nothing():
    eng = Engine()
    try:
        with pytest.raises(TypeError):
            eng.add([("fine", "ok"), ("broken", None)])
        assert eng.lookup("fine") is None
        assert eng.occurrences("fine") == []
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_verbose_build_logs(tmp_path: Path, caplog, monkeypatch):
    monkeypatch.setattr(CFG, "PROGRESS_EVERY_FILES", 1)
    root = tmp_path / "Archive"; root.mkdir()
    (root / "x.txt").write_text("logging works\n", encoding="utf-8")
    eng = Engine()
    try:
        with caplog.at_level("INFO", logger="hit"):
            eng.build(roots=[str(root)], verbose=True)
        assert any("Published index" in rec.getMessage() for rec in caplog.records)
        assert any("[scanned]" in rec.getMessage() for rec in caplog.records)
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_verbose_does_not_stick_to_later_builds(tmp_path: Path, caplog, monkeypatch):
    monkeypatch.setattr(CFG, "PROGRESS_EVERY_FILES", 1)
    monkeypatch.setattr(CFG, "VERBOSE", False)
    root = tmp_path / "Archive"; root.mkdir()
    (root / "x.txt").write_text("logging works\n", encoding="utf-8")

    first = Engine()
    first.build(roots=[str(root)], verbose=True)
    first.shutdown()
    assert CFG.VERBOSE is False

    caplog.clear()
    second = Engine()
    try:
        with caplog.at_level("INFO", logger="hit"):
            second.build(roots=[str(root)])
        assert not any("[scanned]" in rec.getMessage() for rec in caplog.records)
    finally:
        second.shutdown()
