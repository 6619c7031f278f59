"""Root test configuration: isolate every test from local config and env"""

import pytest

from patchpub.config import Settings


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no PATCHPUB_* env vars set."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"PATCHPUB_{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)
