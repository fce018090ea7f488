import os
import sys

import pytest

from sdlt_service.mcp.server import build_server

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SERVER_COMMAND = [sys.executable, "-m", "sdlt_service"]


@pytest.fixture
def server():
    return build_server()
