from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class NaviSettings:
    sheet_url: str = ""
    sheet_timeout_s: float = 15.0
    shortlist_size: int = 5
    ai_provider: str = "openrouter"  # openrouter | stub


def _repo_backend_root() -> Path:
    # backend/pharmacy_navi/config/settings.py -> backend/
    return Path(__file__).resolve().parents[2]


def _parse_scalar(val: str) -> Any:
    if val.lower() in {"true", "false"}:
        return val.lower() == "true"
    if len(val) >= 2 and val[0] == val[-1] and val[0] in {'"', "'"}:
        return val[1:-1]
    try:
        return int(val)
    except ValueError:
        pass
    try:
        return float(val)
    except ValueError:
        return val


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return {}

    # Minimal YAML reader for `backend/config/navi.yaml`:
    # a top-level `navi:` mapping holding scalar `key: value` pairs.
    navi: dict[str, Any] = {}
    in_navi = False
    for line in raw.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if not in_navi and stripped == "navi:":
            in_navi = True
            continue
        if in_navi:
            if not line.startswith("  "):
                in_navi = False
                continue
            kv = stripped.split(":", 1)
            if len(kv) != 2:
                continue
            key = kv[0].strip()
            val = kv[1].strip()
            if " #" in val:
                val = val.split(" #", 1)[0].strip()
            navi[key] = _parse_scalar(val)
    return {"navi": navi} if navi else {}


def _env_str(*keys: str) -> str | None:
    for key in keys:
        if key in os.environ:
            return (os.getenv(key) or "").strip()
    return None


def _env_int(key: str) -> int | None:
    if key not in os.environ:
        return None
    try:
        return int(os.getenv(key) or "")
    except ValueError:
        return None


def _env_float(key: str) -> float | None:
    if key not in os.environ:
        return None
    try:
        return float(os.getenv(key) or "")
    except ValueError:
        return None


@lru_cache(maxsize=1)
def get_settings() -> NaviSettings:
    path = Path(os.getenv("NAVI_CONFIG_PATH") or (_repo_backend_root() / "config" / "navi.yaml"))
    data = _load_yaml(path)
    navi = data.get("navi") if isinstance(data.get("navi"), dict) else {}

    cfg = NaviSettings(
        sheet_url=str(navi.get("sheet_url", "") or ""),
        sheet_timeout_s=float(navi.get("sheet_timeout_s", 15.0) or 15.0),
        shortlist_size=int(navi.get("shortlist_size", 5) or 5),
        ai_provider=str(navi.get("ai_provider", "openrouter") or "openrouter"),
    )

    env_sheet_url = _env_str("NAVI_SHEET_URL", "SHEET_URL")
    env_sheet_timeout_s = _env_float("NAVI_SHEET_TIMEOUT_S")
    env_shortlist_size = _env_int("NAVI_SHORTLIST_SIZE")
    env_ai_provider = _env_str("AI_PROVIDER")

    shortlist_size = env_shortlist_size if env_shortlist_size is not None else cfg.shortlist_size
    if shortlist_size < 1:
        shortlist_size = 5

    return NaviSettings(
        sheet_url=(env_sheet_url if env_sheet_url is not None else cfg.sheet_url),
        sheet_timeout_s=(env_sheet_timeout_s if env_sheet_timeout_s is not None else cfg.sheet_timeout_s),
        shortlist_size=shortlist_size,
        ai_provider=((env_ai_provider or cfg.ai_provider).lower()),
    )
