# app/logging_config.py
import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once, with a rich console handler.

    Repeated calls (tests, re-imports of the app module) leave existing
    handlers in place.
    """
    root = logging.getLogger()
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
