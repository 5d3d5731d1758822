"""Shared pytest fixtures for Regexly tests."""

from __future__ import annotations

import os
import socket
import subprocess
import sys
import time
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


TEST_STORAGE_SECRET = "test-secret-for-e2e"


def _find_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        return s.getsockname()[1]


_SERVER_SCRIPT = f"""
import os
import sys
from pathlib import Path

# Clear pytest-related environment variables that NiceGUI checks
for key in list(os.environ.keys()):
    if 'PYTEST' in key or 'NICEGUI' in key:
        del os.environ[key]

os.environ['APP__STORAGE_SECRET'] = '{TEST_STORAGE_SECRET}'
os.environ['EDITOR__DEFAULT_FLAGS'] = 'g'

port = int(sys.argv[1])

from nicegui import app, ui
import regexly.pages  # noqa: F401 - registers routes

# Serve static JS/CSS assets (mirrors main() in regexly/__init__.py)
import regexly
_static_dir = Path(regexly.__file__).parent / "static"
app.add_static_files("/static", str(_static_dir))

ui.run(port=port, reload=False, show=False, storage_secret='{TEST_STORAGE_SECRET}')
"""


@pytest.fixture(scope="session")
def app_server() -> Generator[str]:
    """Provide the base URL of the NiceGUI app server for E2E tests.

    If ``E2E_BASE_URL`` is set, yields that URL directly.  Otherwise starts
    a NiceGUI server in a subprocess on a random port, once per session.
    """
    external_url = os.environ.get("E2E_BASE_URL")
    if external_url:
        yield external_url
        return

    port = _find_free_port()
    url = f"http://localhost:{port}"

    # Create clean environment without pytest variables
    clean_env = {
        k: v for k, v in os.environ.items() if "PYTEST" not in k and "NICEGUI" not in k
    }

    process = subprocess.Popen(
        [sys.executable, "-c", _SERVER_SCRIPT, str(port)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=clean_env,
    )

    # Wait for server to be ready
    max_wait = 15  # seconds
    start_time = time.time()
    while time.time() - start_time < max_wait:
        if process.poll() is not None:
            stdout, stderr = process.communicate()
            pytest.fail(
                f"Server process died. Exit code: {process.returncode}\n"
                f"stdout: {stdout.decode()}\n"
                f"stderr: {stderr.decode()}"
            )
        try:
            with socket.create_connection(("localhost", port), timeout=1):
                break
        except OSError:
            time.sleep(0.1)
    else:
        process.terminate()
        pytest.fail(f"Server failed to start within {max_wait} seconds")

    yield url

    process.terminate()
    try:
        process.wait(timeout=5)
    except subprocess.TimeoutExpired:
        process.kill()

