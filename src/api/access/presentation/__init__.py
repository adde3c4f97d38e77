"""Access presentation layer.

Exposes the single webhook route used by the access governance platform.
"""

from __future__ import annotations

from access.presentation.routes import router

__all__ = ["router"]
