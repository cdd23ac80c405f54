"""Host manager: transactional hostname and DNS resolver configuration.

The core mutates live OS configuration files under a snapshot/revert
discipline; the HTTP API and CLI are thin layers on top.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
