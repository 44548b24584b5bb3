"""CLI helpers for PACTVERIFY.

Utilities used by the command-line interface: message emitters that write to
stderr with emoji→ASCII fallbacks, the NAME=LEVEL logger option parser, and
the Rich rendering of verification reports.
"""

from .log_level_parser import parse_log_level
from .messages import error, success, warn
from .report_view import print_report

__all__ = ["parse_log_level", "error", "success", "warn", "print_report"]
