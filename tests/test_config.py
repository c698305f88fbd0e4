import importlib
from pathlib import Path

import palette_swap.config as config

def test_import_does_not_touch_filesystem(monkeypatch):
    def _no_mkdir(self, *args, **kwargs):
        raise AssertionError(f"mkdir called for {self}")

    monkeypatch.setattr(Path, "mkdir", _no_mkdir)
    importlib.reload(config)
    assert config.OUTPUTS_DIR.name == "outputs"
