import threading

import pytest

from swarm_registry import SwarmRegistry
from tracker_server import TrackerServer


@pytest.fixture
def tracker():
    """A live tracker on an ephemeral localhost port."""
    httpd = TrackerServer(('127.0.0.1', 0), registry=SwarmRegistry())
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()
    thread.join()


@pytest.fixture
def tracker_url(tracker):
    return f"http://127.0.0.1:{tracker.server_address[1]}"
