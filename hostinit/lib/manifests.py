from __future__ import annotations

from pathlib import Path
from typing import Any, Dict


def _manifest_dir() -> Path:
    # hostinit/lib/manifests.py -> hostinit/manifests
    return Path(__file__).resolve().parents[1] / "manifests"


def load_yaml(path: str | Path) -> Dict[str, Any]:
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML required to load manifests") from e

    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {p}")
    return data


def bundled_manifest_path() -> Path:
    return _manifest_dir() / "bootstrap.yaml"
