# tests/integration/conftest.py — v8
"""Shared fixtures for integration tests.

Most integration tests drive the whole encrypt/decrypt flow through the
in-memory FakeCipherGateway from the top-level conftest. Tests marked
``gpg`` run the real GpgCipherGateway against a throwaway keyring home.

GNUPGHOME lifecycle:
- function scope: fresh home per test, agent killed on teardown
- created under the system temp dir (not tmp_path) because the agent
  socket path must stay below the UNIX socket length limit
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from sympass.cipher.gpg_gateway import GpgCipherGateway

logger = logging.getLogger(__name__)


def _gpg_available() -> bool:
    return shutil.which("gpg") is not None


skip_no_gpg = pytest.mark.skipif(
    not _gpg_available(),
    reason="gpg executable not available",
)


# =====================================================================
#  GNUPG HOME
# =====================================================================

@pytest.fixture
def gnupg_home(monkeypatch) -> Path:
    if not _gpg_available():
        pytest.skip("gpg executable not available")

    home = Path(tempfile.mkdtemp(prefix="sp-gnupg-"))
    home.chmod(0o700)
    monkeypatch.setenv("GNUPGHOME", str(home))
    logger.info("Using GNUPGHOME %s", home)
    yield home

    if shutil.which("gpgconf"):
        subprocess.run(
            ["gpgconf", "--kill", "gpg-agent"],
            capture_output=True, check=False,
        )
    shutil.rmtree(home, ignore_errors=True)


@pytest.fixture
def gpg_gateway(gnupg_home) -> GpgCipherGateway:
    return GpgCipherGateway()
