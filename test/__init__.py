from __future__ import annotations

EXAMPLE_URI = "http://example.com"
