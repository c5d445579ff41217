"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import logging

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local gcovreport package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of gcovreport modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("gcovreport"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Keep logging configuration from leaking between tests."""
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
