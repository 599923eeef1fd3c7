from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_utils import DEFAULT_LOG_PATH


@dataclass(frozen=True)
class InstallerSettings:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def log_path(self) -> str:
        return str(((self.raw.get("logging") or {}).get("path")) or DEFAULT_LOG_PATH)

    @property
    def log_level(self) -> str:
        return str(((self.raw.get("logging") or {}).get("level")) or "INFO").upper()

    @property
    def console(self) -> bool:
        value = (self.raw.get("logging") or {}).get("console")
        return True if value is None else bool(value)


def load_settings(path: Optional[str] = None) -> InstallerSettings:
    """Load installer settings from YAML; no path means defaults."""

    if path is None:
        return InstallerSettings()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer settings must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read installer settings") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{p.name} must contain a mapping/object")

    return InstallerSettings(raw=raw)
