"""
Logging setup. Modules log through logging.getLogger(__name__); this only
installs the root handler once per process.
"""

from __future__ import annotations

import logging

FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if not any(getattr(h, "_storefront", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        handler._storefront = True  # type: ignore[attr-defined]
        root.addHandler(handler)


__all__ = ("configure_logging",)
