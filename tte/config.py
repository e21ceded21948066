"""
Configuration for the tte text editor.

Settings are read from a plain `key=value` file (by default
~/tte/config/tte.conf, or the path in $TTE_CONFIG). Anything missing or
malformed falls back to the built-in default.
"""
import os
from dataclasses import dataclass, fields

from tte import logger

VERSION = "0.0.1"

CONFIG_PATH = os.path.expanduser("~/tte/config/tte.conf")

@dataclass
class Settings:
    quit_times: int = 3            # Ctrl-Q presses needed to drop unsaved changes
    message_timeout: float = 5.0   # seconds a status message stays visible
    log_file: str = "~/tte/tte.log"
    alternate_screen: bool = True

def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("1", "yes", "true", "on"):
        return True
    if lowered in ("0", "no", "false", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")

def _convert(kind, value: str):
    if kind is bool:
        return _parse_bool(value)
    if kind is int:
        return int(value)
    if kind is float:
        return float(value)
    return value

def parse_settings(lines) -> Settings:
    """Build Settings from an iterable of `key=value` lines."""
    settings = Settings()
    known = {f.name: f.type for f in fields(Settings)}
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            logger.log(f"config: ignoring line without '=': {line}")
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if key not in known:
            logger.log(f"config: unknown key '{key}'")
            continue
        try:
            converted = _convert(known[key], value)
        except ValueError as e:
            logger.log(f"config: bad value for '{key}': {e}")
            continue
        if key == "quit_times" and converted < 1:
            logger.log(f"config: quit_times must be at least 1, got {converted}")
            continue
        setattr(settings, key, converted)
    return settings

def load_settings(path: str = None) -> Settings:
    """
    Load settings from `path`, $TTE_CONFIG or ~/tte/config/tte.conf.
    A missing or unreadable file yields the defaults.
    """
    if path is None:
        path = os.environ.get("TTE_CONFIG") or CONFIG_PATH
    path = os.path.expanduser(path)
    if not os.path.isfile(path):
        return Settings()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return parse_settings(f)
    except OSError as e:
        logger.log_error(f"config: could not read {path}", e)
        return Settings()
