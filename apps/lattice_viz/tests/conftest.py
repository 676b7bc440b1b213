import threading

import pytest

from apps.lattice_viz.server import make_server
from visual.lattice import GenerationRequest


@pytest.fixture
def small_request():
    return GenerationRequest(dimension=2, sum_limit=2)


@pytest.fixture
def public_dir(tmp_path):
    return tmp_path / "public"


@pytest.fixture
def live_server(small_request, public_dir):
    httpd = make_server(small_request, public_dir=public_dir, host="127.0.0.1", port=0)
    thread = threading.Thread(target=httpd.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}"
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join(timeout=5)
