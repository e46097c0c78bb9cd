from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("localcov")

logger = logging.getLogger("localcov")

__all__ = ["__version__", "logger"]
