"""Top-level schooladmin package.

Sub-packages
------------
schooladmin.backend
    FastAPI mock server (api/), domain logic (core/), schemas/, services/
    and the command line (cli/)
"""

from __future__ import annotations

__version__ = "0.1.0"
