# uiauto_android/config.py
"""
@file config.py
@brief YAML client configuration with JSON-schema validation.
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft202012Validator

from .exceptions import ConfigError
from .snapshot import DEFAULT_XML_PATTERN

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schemas", "config.schema.json")

ENV_SERIAL = "UIAUTO_ANDROID_SERIAL"
ENV_ADB = "UIAUTO_ANDROID_ADB"


@dataclass(frozen=True)
class AdbConfig:
    path: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    command_timeout: float = 30.0


@dataclass(frozen=True)
class LocatorConfig:
    default_timeout: float = 0.0
    polling_interval: float = 0.2
    xml_pattern: str = DEFAULT_XML_PATTERN


@dataclass(frozen=True)
class ClientConfig:
    serial: Optional[str] = None
    adb: AdbConfig = field(default_factory=AdbConfig)
    locator: LocatorConfig = field(default_factory=LocatorConfig)

    def with_overrides(self, serial: Optional[str] = None, adb_path: Optional[str] = None) -> "ClientConfig":
        """Return a copy with command-line/environment overrides applied."""
        cfg = self
        if serial:
            cfg = replace(cfg, serial=serial)
        if adb_path:
            cfg = replace(cfg, adb=replace(cfg.adb, path=adb_path))
        return cfg


def _load_schema(path: str = SCHEMA_PATH) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_config(data: Dict[str, Any]) -> None:
    """Validate raw config data against the packaged JSON schema."""
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        lines = ["Config schema validation failed:"]
        for e in errors:
            lines.append(f"- {list(e.path)}: {e.message}")
        raise ConfigError("\n".join(lines))

    pattern = (data.get("locator") or {}).get("xml_pattern")
    if pattern is not None:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"locator.xml_pattern is not a valid regex: {e}") from e


def parse_config(data: Optional[Dict[str, Any]]) -> ClientConfig:
    """Build a ClientConfig from an already loaded mapping."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError("Config YAML must be a mapping at root.")
    validate_config(data)

    device = data.get("device") or {}
    adb = data.get("adb") or {}
    locator = data.get("locator") or {}

    return ClientConfig(
        serial=device.get("serial"),
        adb=AdbConfig(
            path=adb.get("path"),
            host=adb.get("host"),
            port=adb.get("port"),
            command_timeout=float(adb.get("command_timeout", 30.0)),
        ),
        locator=LocatorConfig(
            default_timeout=float(locator.get("default_timeout", 0.0)),
            polling_interval=float(locator.get("polling_interval", 0.2)),
            xml_pattern=str(locator.get("xml_pattern", DEFAULT_XML_PATTERN)),
        ),
    )


def load_config(path: Optional[str] = None) -> ClientConfig:
    """
    Load client configuration.

    @param path YAML file; None yields defaults
    @return ClientConfig with UIAUTO_ANDROID_SERIAL / UIAUTO_ANDROID_ADB applied
    @throws ConfigError if the file is missing, not YAML, or fails validation
    """
    data: Dict[str, Any] = {}
    if path:
        path = os.path.abspath(path)
        if not os.path.exists(path):
            raise ConfigError(f"Config YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping at root.")

    cfg = parse_config(data)
    return cfg.with_overrides(serial=os.getenv(ENV_SERIAL), adb_path=os.getenv(ENV_ADB))
