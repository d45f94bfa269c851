"""Content-store access: GROQ query building, HTTP client, and record formatting."""

from __future__ import annotations

__all__ = ["catalog", "formatter", "query", "store"]
