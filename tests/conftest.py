import sys
from pathlib import Path

import pytest

# Ensure the src layout is importable as top-level `visearch`
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_ROOT = PROJECT_ROOT / "src"
if SRC_ROOT.exists() and str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    import visearch.config as config_module

    # configure() mutates the module-level defaults; each test gets a fresh copy
    monkeypatch.setattr(config_module, "_global_settings", config_module.Settings())
    for name in ("VISEARCH_ENDPOINT", "VISEARCH_ACCESS_KEY", "VISEARCH_SECRET_KEY"):
        monkeypatch.delenv(name, raising=False)
    # no proxies picked up from the host while sending through stub sessions
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
