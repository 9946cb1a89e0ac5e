"""Environment-driven settings. Entry points call ``load_dotenv()`` before loading."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

_ROOT = Path(__file__).parent.parent.parent

PROVIDERS = ("api", "skyfield")
LANGUAGES = ("en", "ko")


class ConfigError(Exception):
    """Invalid or incomplete configuration."""


@dataclass(frozen=True)
class Settings:
    address: str | None  # Geocoded when lat/lng are not given
    lat: float | None
    lng: float | None
    tz_name: str | None  # Resolved from coordinates when None
    provider: str  # "api" (sunrise-sunset.org) or "skyfield" (offline)
    tick_seconds: float
    refresh_seconds: float
    lang: str
    ephemeris_dir: Path  # skyfield download cache

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None


def _float(env: Mapping[str, str], key: str, default: float | None) -> float | None:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from exc


def _choice(env: Mapping[str, str], key: str, default: str, choices: tuple[str, ...]) -> str:
    value = env.get(key, "").strip().lower() or default
    if value not in choices:
        raise ConfigError(f"{key} must be one of {choices}, got {value!r}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read DAYSKY_* variables into a Settings object.

    Args:
        environ: Variable mapping. ``os.environ`` when None.

    Raises:
        ConfigError: On malformed values, a lone latitude or longitude, or no
            location at all.
    """
    env = os.environ if environ is None else environ

    lat = _float(env, "DAYSKY_LAT", None)
    lng = _float(env, "DAYSKY_LNG", None)
    if (lat is None) != (lng is None):
        raise ConfigError("DAYSKY_LAT and DAYSKY_LNG must be set together")
    if lat is not None and not -90 <= lat <= 90:
        raise ConfigError(f"DAYSKY_LAT out of range: {lat}")
    if lng is not None and not -180 <= lng <= 180:
        raise ConfigError(f"DAYSKY_LNG out of range: {lng}")

    address = env.get("DAYSKY_ADDRESS", "").strip() or None
    if lat is None and address is None:
        raise ConfigError("Set DAYSKY_LAT/DAYSKY_LNG or DAYSKY_ADDRESS")

    tick = _float(env, "DAYSKY_TICK_SECONDS", 1.0)
    refresh = _float(env, "DAYSKY_REFRESH_SECONDS", 60.0)
    assert tick is not None and refresh is not None
    if tick <= 0 or refresh <= 0:
        raise ConfigError("DAYSKY_TICK_SECONDS and DAYSKY_REFRESH_SECONDS must be positive")

    ephemeris_dir = env.get("DAYSKY_EPHEMERIS_DIR", "").strip()
    return Settings(
        address=address,
        lat=lat,
        lng=lng,
        tz_name=env.get("DAYSKY_TZ", "").strip() or None,
        provider=_choice(env, "DAYSKY_PROVIDER", "api", PROVIDERS),
        tick_seconds=tick,
        refresh_seconds=refresh,
        lang=_choice(env, "DAYSKY_LANG", "en", LANGUAGES),
        ephemeris_dir=Path(ephemeris_dir) if ephemeris_dir else _ROOT / "resources",
    )
