from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("covmerge")

logger = logging.getLogger("covmerge")

__all__ = ["__version__", "logger"]
