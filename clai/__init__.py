"""Ask a chat model from the command line and print its answer or code."""

__version__ = "0.1.0"

from .cli import main  # noqa: E402  (re-export for convenience)

__all__ = ["main", "__version__"]
