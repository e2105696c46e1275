from pathlib import Path
import pytest
from hit.engine import Engine

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "short.txt").write_text("a line with a lone a\n", encoding="utf-8")
    return str(root)

@pytest.mark.e2e
def test_empty_and_single_char_query(tmp_path: Path):
    roots = _seed(tmp_path)
    eng = Engine()
    try:
        eng.build(roots=[roots])
        assert eng.complete("") == []
        assert eng.complete("a") == []
        assert eng.complete("A") == []
        # single-char tokens are still reachable by exact lookup
        assert len(eng.lookup("a")["short.txt:1"]) == 3
        assert [r.token for r in eng.complete("li")] == ["line"]
    finally:
        eng.shutdown()
