"""Render and write the lattice visualization page."""

from __future__ import annotations

import logging
from pathlib import Path
from string import Template

from visual.lattice import GenerationRequest

WEBROOT = Path(__file__).parent / "webroot"
TEMPLATE_PATH = WEBROOT / "lattice.html"
INDEX_NAME = "index.html"


def render_page(request: GenerationRequest) -> str:
    """Fill the page template with the request's parameters."""
    template = Template(TEMPLATE_PATH.read_text(encoding="utf-8"))
    return template.substitute(dimension=request.dimension, sum_limit=request.sum_limit)


def write_page(request: GenerationRequest, out_dir: Path) -> Path:
    """Write index.html into out_dir, creating the directory if needed."""
    out_dir.mkdir(parents=True, exist_ok=True)
    index = out_dir / INDEX_NAME
    index.write_text(render_page(request), encoding="utf-8")
    logging.debug("Wrote %s", index)
    return index
