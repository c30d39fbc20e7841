import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"

path_str = str(SRC_ROOT)
if path_str not in sys.path:
    sys.path.insert(0, path_str)

from wom_sync.classes.config_store import ConfigStore  # noqa: E402


@pytest.fixture
def store():
    config_store = ConfigStore(":memory:")
    yield config_store
    config_store.close()
