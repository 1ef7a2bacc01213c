"""
Logging Setup - Root logging configuration for embedding applications.
"""

import logging


def setup_logging(verbose: bool = False):
    """Configure logging; verbose enables the protocol chatter at DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
