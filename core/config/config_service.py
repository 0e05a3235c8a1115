"""Typed, layered configuration loader with precedence handling."""
from __future__ import annotations

import os
import configparser
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Dict

# --------------------------------------------------------------------------- #
#  Paths & default definitions
# --------------------------------------------------------------------------- #

def _find_project_root() -> Path:
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "core").is_dir():
            return parent
    return here.parent

PROJECT_ROOT = _find_project_root()
CONFIG_DIR = PROJECT_ROOT / "core" / "config"
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"

ENV_PREFIX = "SIGPAD_"


_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "Pen": {
        "width": "2",
        "color": "#000000",
    },
    "Surface": {
        "width": "600",
        "height": "300",
        "device_pixel_ratio": "1.0",
        "detect_device_pixel_ratio": "true",
        "block_input_while_redrawing": "false",
    },
    "Export": {
        "default_format": "png",
        "file_stem": "signature",
        "jpeg_quality": "95",
    },
    "Logging": {
        "level": "INFO",
        "event_log_enabled": "false",
        "event_log_db": (PROJECT_ROOT / "databases" / "signature_pad_events.db").as_posix(),
    },
}


# --------------------------------------------------------------------------- #
#  Datamodels
# --------------------------------------------------------------------------- #

@dataclass
class PenConfig:
    width: float = 2.0
    color: str = "#000000"


@dataclass
class SurfaceConfig:
    width: int = 600
    height: int = 300
    device_pixel_ratio: float = 1.0
    detect_device_pixel_ratio: bool = True
    block_input_while_redrawing: bool = False


@dataclass
class ExportConfig:
    default_format: str = "png"
    file_stem: str = "signature"
    jpeg_quality: int = 95


@dataclass
class LoggingConfig:
    level: str = "INFO"
    event_log_enabled: bool = False
    event_log_db: Path = PROJECT_ROOT / "databases" / "signature_pad_events.db"


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #

def _cp_to_dict(cp: configparser.ConfigParser) -> Dict[str, Dict[str, Any]]:
    data: Dict[str, Dict[str, Any]] = {}
    for section in cp.sections():
        data[section] = {k: v for k, v in cp.items(section)}
    return data


def _apply(target: Dict[str, Dict[str, Any]], source: Dict[str, Dict[str, Any]]) -> None:
    for section, items in source.items():
        target.setdefault(section, {}).update(items)


def _cast(value: Any, typ: Any) -> Any:
    if typ is Path or typ == "Path":
        return Path(str(value)).expanduser()
    if typ is bool or typ == "bool":
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if typ is int or typ == "int":
        return int(value)
    if typ is float or typ == "float":
        return float(value)
    if typ is str or typ == "str":
        return str(value)
    return typ(value)


def _build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    # field.type is a string under "from __future__ import annotations"
    kwargs = {}
    for field in fields(cls):
        val = data.get(field.name, field.default)
        kwargs[field.name] = _cast(val, field.type)
    return cls(**kwargs)


def _env_overlays(environ: Dict[str, str] | None = None) -> Dict[str, Dict[str, Any]]:
    result: Dict[str, Dict[str, Any]] = {}
    for env_key, value in (os.environ if environ is None else environ).items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        remainder = env_key[len(ENV_PREFIX):]
        parts = remainder.split("__", 1)
        if len(parts) != 2:
            continue
        section, key = parts
        section = section.title()
        key = key.lower()
        result.setdefault(section, {})[key] = value
    return result


def _user_config_path() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "SignaturePad" / "config.ini"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "signature_pad" / "config.ini"


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Facade merging layered configuration with type safety.

    Precedence (later wins): embedded defaults, defaults.ini, environment
    (``SIGPAD_<SECTION>__<KEY>``), machine config.ini, user config.ini.
    """

    def __init__(self, *, defaults_ini: Path = DEFAULTS_INI,
                 machine_ini: Path = MACHINE_INI,
                 user_ini: Path | None = None,
                 environ: Dict[str, str] | None = None) -> None:
        self._lock = RLock()
        self._defaults_ini = Path(defaults_ini)
        self._machine_ini = Path(machine_ini)
        self._user_ini = Path(user_ini) if user_ini is not None else _user_config_path()
        self._environ = environ
        self.reload()

    # ------------------------------------------------------------------ #
    def reload(self) -> None:
        with self._lock:
            merged: Dict[str, Dict[str, Any]] = {}

            # Layer 0: embedded defaults
            _apply(merged, _DEFAULTS)

            # Layer 1: defaults.ini
            if self._defaults_ini.exists():
                cp = configparser.ConfigParser()
                cp.read(self._defaults_ini, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp))

            # Layer 2: environment variables
            env = _env_overlays(self._environ)
            _apply(merged, env)

            # Layer 3: machine config
            if self._machine_ini.exists():
                cp = configparser.ConfigParser()
                cp.read(self._machine_ini, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp))

            # Layer 4: user overrides
            if self._user_ini.exists():
                cp = configparser.ConfigParser()
                cp.read(self._user_ini, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp))

            self.pen = _build_dataclass(PenConfig, merged.get("Pen", {}))
            self.surface = _build_dataclass(SurfaceConfig, merged.get("Surface", {}))
            self.export = _build_dataclass(ExportConfig, merged.get("Export", {}))
            self.logging = _build_dataclass(LoggingConfig, merged.get("Logging", {}))


# Global singleton
config_service = ConfigService()
