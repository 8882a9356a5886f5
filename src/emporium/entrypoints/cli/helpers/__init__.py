"""CLI helpers for EMPORIUM.

Safe display of database URLs, OSC-8 hyperlinks where the terminal supports
them, and stderr message emitters with ASCII fallbacks.
"""

from .db_url import sanitize_url
from .hyperlinks import hyperlink
from .messages import error, success, warn

__all__ = ["sanitize_url", "error", "warn", "success", "hyperlink"]
