"""
Configuration package for the transposon evolution simulator.

This package contains the environment-driven settings and the logging setup
used by the services layer.
"""

import logging
from typing import Optional

from .settings import settings

__version__ = "1.0.0"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the simulator."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format=settings.log_format
    )
