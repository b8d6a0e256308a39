from __future__ import annotations

from pathlib import Path

import pytest

WIDGET_PAGE = """<!DOCTYPE html>
<html>
<head><title>Class Widget</title></head>
<body>
<article>
<h1 id="Widget" data-uid="Widget">Widget</h1>
<div class="summary">A small widget.</div>
<h3 id="constructors">Constructors</h3>
<h4 id="Widget__ctor" data-uid="Widget.#ctor">Widget()</h4>
<div class="summary">Creates a widget.</div>
<h3 id="methods">Methods</h3>
<h4 id="Widget_Reset" data-uid="Widget.Reset()">Reset()</h4>
<div class="summary">Resets state.</div>
<h4 id="Widget_Resize_System_Int32_" data-uid="Widget.Resize(System.Int32)">Resize(Int32)</h4>
<div class="markdown level1 conceptual"><p>Changes size in pixels.</p></div>
<h5 id="Widget_Resize_System_Int32__aliases">Aliases</h5>
<p>Scale</p>
</article>
</body>
</html>
"""


@pytest.fixture
def widget_html() -> str:
    return WIDGET_PAGE


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "_site"
    root.mkdir()
    return root


@pytest.fixture
def write_page(site: Path):
    def _write(relative_path: str, html: str) -> Path:
        path = site / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        return path

    return _write
