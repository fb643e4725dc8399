"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import os
import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local codeoutline package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of codeoutline modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("codeoutline"):
        del sys.modules[module_name]


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """Restore default structlog/stdlib logging after a test configures it."""
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run with no global config, no env overrides, cwd at an empty directory."""
    monkeypatch.setattr(
        "codeoutline.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml"
    )
    for key in list(os.environ):
        if key.upper().startswith("CODEOUTLINE__"):
            monkeypatch.delenv(key)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
