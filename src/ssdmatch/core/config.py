"""core.config
Configuration core: load/save helpers for config.ini.

This module provides a tiny ConfigManager used by the command line layer to
read and persist simple key/value settings (worker count, chunk size, marker
color, benchmark iterations). The vision core never reads it directly.
"""

import os
from configparser import ConfigParser
from pathlib import Path
from typing import Optional, Tuple

DEFAULTS = {
    "log_level": "INFO",
    "log_to_file": "True",
    # 0 means one worker per CPU
    "workers": "0",
    "chunk_pixels": "4096",
    "marker_color": "255,0,0",
    "bench_iterations": "100",
    "bench_warmup": "5",
}


class ConfigManager:
    """Simple configuration manager backed by an INI file.

    Behaviour:
    - Uses a single DEFAULT section for lookups.
    - Creates the file with sensible defaults if it does not exist.
    - Defaults to a per-user config path (%APPDATA% on Windows,
      XDG_CONFIG_HOME or ~/.config on other systems) unless an explicit
      path is provided.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        if config_path:
            self.config_path = Path(config_path)
        else:
            if os.name == "nt":
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
            else:
                base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            self.config_path = base.joinpath("SSDMatch", "config.ini")

        self.config = ConfigParser()
        self.load()

    def load(self) -> None:
        """Load configuration from disk, creating defaults when needed."""
        existed = self.config_path.exists()
        if existed:
            self.config.read(self.config_path)

        missing = [key for key in DEFAULTS if key not in self.config["DEFAULT"]]
        for key in missing:
            self.config["DEFAULT"][key] = DEFAULTS[key]

        if not existed or missing:
            self.save()

    def get(self, key: str, fallback=None):
        """Get a configuration value.

        Precedence is env (SSD_<KEY>, then <KEY>) > config.ini > fallback.
        """
        for ek in (f"SSD_{str(key).upper()}", str(key).upper()):
            val = os.environ.get(ek)
            if val is not None and str(val) != "":
                return val
        return self.config["DEFAULT"].get(key, fallback)

    def get_int(self, key: str, fallback: int = 0) -> int:
        val = self.get(key)
        if val is None:
            return fallback
        try:
            return int(str(val).strip())
        except ValueError:
            raise ValueError(f"Config value {key}={val!r} is not an integer") from None

    def get_bool(self, key: str, fallback: bool = False) -> bool:
        val = self.get(key)
        if val is None:
            return fallback
        return str(val).strip().lower() in {"1", "true", "yes", "on"}

    def get_color(self, key: str = "marker_color") -> Tuple[int, int, int]:
        """Parse an "R,G,B" value into a tuple of three 0..255 ints."""
        val = str(self.get(key, DEFAULTS.get(key, "")))
        try:
            parts = tuple(int(p.strip()) for p in val.split(","))
        except ValueError:
            raise ValueError(f"Config value {key}={val!r} is not an R,G,B color") from None
        if len(parts) != 3 or any(not 0 <= p <= 255 for p in parts):
            raise ValueError(f"Config value {key}={val!r} is not an R,G,B color")
        return parts

    def save(self) -> None:
        """Persist current configuration to disk (creates parent directories)."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as fh:
            self.config.write(fh)
