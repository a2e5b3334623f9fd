"""
Logging configuration for the Products service.

Every module logs through logging.getLogger(__name__); this module configures
the root logger once, when the application starts.
"""
import logging
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s"


def setup_logging():
    """
    Configure the global logging system.

    Logs go to stdout (Docker compatible) at LOG_LEVEL. SQL echo and access
    logs are reduced to warnings.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce verbosity from external libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
