# Tests import modules the way the CLI does (`from core.config import ...`),
# so `src/` must be importable without an install.
import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(__file__)
SRC_DIR = os.path.join(PROJECT_ROOT, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch, tmp_path):
    """Keep NGINX_RP_* variables and a stray .env out of every test."""
    for name in list(os.environ):
        if name.upper().startswith("NGINX_RP_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
