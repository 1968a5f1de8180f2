"""Ambient plumbing — structured logging and environment configuration.

This package is framework-agnostic. It must NEVER import from the rest of
``botmethods``.
"""

from botmethods.core.logger import BotMethodsLogger

__all__ = [
    "BotMethodsLogger",
]
