"""gridy の公開 API。"""

from __future__ import annotations

from gridy.api.export import Export, preview

__all__ = ["Export", "preview"]
