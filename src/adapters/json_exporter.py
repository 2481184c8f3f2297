"""Exportación JSON de escaneos de claves.

Por qué JSON:
- Permite guardar el inventario de claves de host y compararlo después.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import HostKeyScan


def export_scan_json(*, scan: HostKeyScan, output_path: Path) -> Path:
    """Exporta `HostKeyScan` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = scan.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
