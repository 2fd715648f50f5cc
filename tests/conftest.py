import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()


def sarif_document(results: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    run: dict[str, Any] = {
        "tool": {"driver": {"name": "TestTool", "version": "1.0.0"}},
    }
    if results is not None:
        run["results"] = results
    return {"version": "2.1.0", "runs": [run]}


def sarif_result(
    rule_id: str,
    level: str,
    text: str,
    uri: str | None = None,
    start_line: int | None = None,
) -> dict[str, Any]:
    result: dict[str, Any] = {
        "ruleId": rule_id,
        "level": level,
        "message": {"text": text},
    }
    if uri is not None:
        physical: dict[str, Any] = {"artifactLocation": {"uri": uri}}
        if start_line is not None:
            physical["region"] = {"startLine": start_line}
        result["locations"] = [{"physicalLocation": physical}]
    return result


@pytest.fixture
def write_sarif(tmp_path: Path) -> Callable[[Any], Path]:
    def _write(document: Any, name: str = "test.sarif") -> Path:
        path = tmp_path / name
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
