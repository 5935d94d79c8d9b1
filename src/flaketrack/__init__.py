import logging
from importlib.metadata import version

__version__ = version("flaketrack")

logger = logging.getLogger(__name__)

__all__ = ["__version__", "logger"]
