# --- pdocx_lib/config.py ---
"""
pdocx_lib/config.py: Loads layout and writer settings from an INI file.
"""
import configparser
import logging
from dataclasses import dataclass, field, fields, replace

from .constants import LayoutConfig, WriterConfig

log = logging.getLogger("pdocx.config")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class PdocxConfig:
    """All settings for one conversion run."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)


class ConfigService:
    """
    Reads settings from a pdocx .cfg file, applying defaults if missing.
    The file has a [Layout] and a [Writer] section whose keys are the field
    names of LayoutConfig and WriterConfig.
    """

    SECTIONS = {"Layout": LayoutConfig, "Writer": WriterConfig}

    def __init__(self, config_path: str | None = None):
        self.config_path = config_path

    def get_config(self) -> PdocxConfig:
        """Returns the effective configuration."""
        if not self.config_path:
            return PdocxConfig()
        parser = configparser.ConfigParser()
        if not parser.read(self.config_path, encoding="utf-8"):
            log.info("Config file not found at %s. Using defaults.", self.config_path)
            return PdocxConfig()

        for section in parser.sections():
            if section not in self.SECTIONS:
                log.warning("Ignoring unknown config section [%s].", section)

        layout = self._load_section(parser, "Layout", LayoutConfig())
        writer = self._load_section(parser, "Writer", WriterConfig())
        log.info("Loaded settings from %s", self.config_path)
        return PdocxConfig(layout=layout, writer=writer)

    def save_settings(self, config: PdocxConfig):
        """Saves the given configuration to the config file."""
        parser = configparser.ConfigParser()
        for section, record in (("Layout", config.layout), ("Writer", config.writer)):
            parser[section] = {f.name: str(getattr(record, f.name)) for f in fields(record)}
        try:
            with open(self.config_path, "w", encoding="utf-8") as configfile:
                parser.write(configfile)
            log.info("Settings successfully saved to %s", self.config_path)
        except IOError as e:
            log.error("Failed to write settings to %s: %s", self.config_path, e)
            raise

    def _load_section(self, parser, section, defaults):
        """Overrides the fields of `defaults` with values from `section`."""
        if not parser.has_section(section):
            return defaults
        known = {f.name: f for f in fields(defaults)}
        overrides = {}
        for key, raw in parser.items(section):
            if key not in known:
                log.warning("Ignoring unknown setting '%s' in [%s].", key, section)
                continue
            overrides[key] = self._convert(raw, getattr(defaults, key), section, key)
        return replace(defaults, **overrides)

    def _convert(self, raw, default, section, key):
        """Converts a raw string to the type of the field's default value."""
        value = raw.strip()
        try:
            if isinstance(default, bool):
                if value.lower() in _TRUE_VALUES:
                    return True
                if value.lower() in _FALSE_VALUES:
                    return False
                raise ValueError(f"not a boolean: {value!r}")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
        except ValueError as e:
            raise ValueError(f"Invalid value for [{section}] {key}: {e}") from e
        return value
