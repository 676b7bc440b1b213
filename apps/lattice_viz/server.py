"""HTTP server for the lattice visualizer."""

from __future__ import annotations

import errno
import json
import logging
import mimetypes
import os
import webbrowser
from dataclasses import dataclass
from functools import partial
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse

from visual.lattice import (
    GenerationRequest,
    InvalidArgument,
    bounding_extent,
    generate_request,
    parse_request,
    to_positions,
    total_points,
)

from apps.lattice_viz.page import INDEX_NAME, write_page


@dataclass(frozen=True)
class Defaults:
    host: str = "127.0.0.1"
    port: int = 3000
    max_port_attempts: int = 20
    # itertools.product holds one pool per axis, keep query-driven dimensions bounded
    max_dimension: int = 64
    # largest integer a float32 position buffer holds exactly
    max_sum_limit: int = 2**24
    preview_size: int = 5


class PortUnavailable(OSError):
    """Raised when no port in the retry window could be bound."""


class LatticeServer(ThreadingHTTPServer):
    # a second instance must move to the next port, not share this one
    allow_reuse_port = False


def _resolve_public(public_dir: Path, url_path: str) -> Path | None:
    """Map a URL path onto a file under public_dir, None if it escapes."""
    norm = os.path.normpath(url_path.lstrip("/") or INDEX_NAME)
    if norm.startswith("..") or os.path.isabs(norm):
        return None
    return public_dir.absolute() / norm


def check_servable(request: GenerationRequest) -> GenerationRequest:
    if request.dimension > Defaults.max_dimension:
        raise InvalidArgument(f"dimension must be <= {Defaults.max_dimension}, got {request.dimension}")
    if request.sum_limit > Defaults.max_sum_limit:
        raise InvalidArgument(f"sumLimit must be <= {Defaults.max_sum_limit}, got {request.sum_limit}")
    return request


def lattice_payload(request: GenerationRequest, preview_size: int = Defaults.preview_size) -> dict[str, Any]:
    """Generate the point set for a request and shape it for the page."""
    points = generate_request(request)
    positions = to_positions(points)
    total = total_points(request.dimension, request.sum_limit)
    return {
        "ok": True,
        "dimension": request.dimension,
        "sumLimit": request.sum_limit,
        "count": len(points),
        "total": total,
        "truncated": total > len(points),
        "preview": [list(p) for p in points[:preview_size]],
        "extent": bounding_extent(positions),
        "positions": positions.tolist(),
    }


class LatticeHandler(BaseHTTPRequestHandler):
    server_version = "LatticeViz/0.1"

    def __init__(self, *args: Any, public_dir: Path, request_defaults: GenerationRequest, **kwargs: Any) -> None:
        self.public_dir = public_dir
        self.request_defaults = request_defaults
        super().__init__(*args, **kwargs)

    def log_message(self, fmt: str, *args: Any) -> None:
        # request lines only show up with --debug
        logging.debug("%s %s", self.client_address[0], fmt % args)

    def _reply(self, status: int, content_type: str, body: bytes, cache: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", cache)
        self.end_headers()
        self.wfile.write(body)

    def _reply_json(self, status: int, payload: dict[str, Any]) -> None:
        body = json.dumps(payload).encode("utf-8")
        self._reply(status, "application/json; charset=utf-8", body, cache="no-store")

    def _serve_public(self, url_path: str) -> None:
        target = _resolve_public(self.public_dir, url_path)
        if target is None:
            self.send_error(HTTPStatus.FORBIDDEN)
            return
        if not target.is_file():
            logging.debug("Not in public dir: %s", target)
            self.send_error(HTTPStatus.NOT_FOUND)
            return

        try:
            body = target.read_bytes()
        except OSError:
            logging.exception("Reading %s failed", target)
            self.send_error(HTTPStatus.INTERNAL_SERVER_ERROR)
            return

        ctype, _ = mimetypes.guess_type(target.name)
        # the page is rewritten on every start, other files may be cached briefly
        cache = "no-cache" if target.name == INDEX_NAME else "max-age=300"
        self._reply(HTTPStatus.OK, ctype or "application/octet-stream", body, cache=cache)

    def _handle_lattice(self, query: str) -> None:
        params = parse_qs(query)
        dimension = params.get("dimension", [str(self.request_defaults.dimension)])[0]
        sum_limit = params.get("sumLimit", [str(self.request_defaults.sum_limit)])[0]

        try:
            request = check_servable(parse_request(dimension, sum_limit))
        except InvalidArgument as e:
            logging.warning("Rejected lattice request: %s", e)
            self._reply_json(HTTPStatus.BAD_REQUEST, {"ok": False, "error": str(e)})
            return

        try:
            payload = lattice_payload(request)
        except Exception:
            logging.exception("Lattice generation failed for %s", request)
            self._reply_json(HTTPStatus.INTERNAL_SERVER_ERROR, {"ok": False, "error": "Lattice generation failed."})
            return

        logging.info(
            "Generated %d lattice points (dimension=%d, sumLimit=%d)",
            payload["count"],
            request.dimension,
            request.sum_limit,
        )
        self._reply_json(HTTPStatus.OK, payload)

    def do_GET(self) -> None:  # noqa: N802 (stdlib naming)
        parsed = urlparse(self.path)
        if parsed.path == "/api/lattice":
            self._handle_lattice(parsed.query)
            return
        self._serve_public(parsed.path)


def bind_server(
    host: str,
    port: int,
    handler: Any,
    max_attempts: int = Defaults.max_port_attempts,
) -> LatticeServer:
    """
    Bind a server on the first free port starting at ``port``.

    Tries ``port, port + 1, ...`` while the address is in use. Port 0 asks
    the OS for an ephemeral port and is never retried.

    Raises:
        PortUnavailable: If max_attempts ports were all in use
        OSError: For any bind failure other than EADDRINUSE
    """
    candidate = port
    for _ in range(max(max_attempts, 1)):
        try:
            return LatticeServer((host, candidate), handler)
        except OSError as e:
            if e.errno != errno.EADDRINUSE or port == 0:
                raise
            logging.info("Port %d is in use, trying another port...", candidate)
            candidate += 1
    raise PortUnavailable(errno.EADDRINUSE, f"No free port in {port}-{candidate - 1} on {host}")


def make_server(
    request: GenerationRequest,
    *,
    public_dir: Path,
    host: str = Defaults.host,
    port: int = Defaults.port,
    max_port_attempts: int = Defaults.max_port_attempts,
) -> LatticeServer:
    """Write the page into public_dir and bind a server that serves it."""
    write_page(request, public_dir)
    handler = partial(LatticeHandler, public_dir=public_dir, request_defaults=request)
    return bind_server(host, port, handler, max_attempts=max_port_attempts)


def run_server(
    request: GenerationRequest,
    *,
    public_dir: Path,
    host: str = Defaults.host,
    port: int = Defaults.port,
    max_port_attempts: int = Defaults.max_port_attempts,
    open_browser: bool = True,
    debug: bool = False,
) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    logging.info("Public dir: %s", public_dir.resolve())
    with make_server(
        request, public_dir=public_dir, host=host, port=port, max_port_attempts=max_port_attempts
    ) as httpd:
        bound_port = httpd.server_address[1]
        url = f"http://{host}:{bound_port}"
        logging.info("Server running at %s", url)
        logging.info(
            "Visualizing %d-dimensional lattice with sum limit %d", request.dimension, request.sum_limit
        )
        if open_browser:
            webbrowser.open(url)
        try:
            httpd.serve_forever(poll_interval=0.2)
        except KeyboardInterrupt:
            logging.info("Shutting down server...")
    logging.info("Server closed")
