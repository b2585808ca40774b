"""Configuration loading and vault registry."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from vault_navigator.constants import (
    CONFIG_ENV_VAR,
    CONFIG_PATH,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TRANSPORT,
)
from vault_navigator.data_models import ServerSettings, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)

TRANSPORTS = {"stdio", "streamable-http", "sse"}


def _load_server_settings(raw_server: object) -> ServerSettings:
    if raw_server is None:
        raw_server = {}
    if not isinstance(raw_server, dict):
        raise ValueError("The 'server' section must be a mapping of settings")

    transport = raw_server.get("transport", DEFAULT_TRANSPORT)
    if transport not in TRANSPORTS:
        raise ValueError(
            f"Unsupported transport '{transport}'. Expected one of: {', '.join(sorted(TRANSPORTS))}"
        )

    host = raw_server.get("host", DEFAULT_HOST)
    port = raw_server.get("port", DEFAULT_PORT)
    if not isinstance(port, int) or not 0 < port < 65536:
        raise ValueError(f"Server port must be an integer between 1 and 65535, got {port!r}")

    return ServerSettings(transport=transport, host=str(host), port=port)


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
        in the project root.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata, the configured default vault name and the server settings.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, invalid entries, etc.).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a YAML mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        resolved_path = Path(raw_path).expanduser().resolve(strict=False)
        description = (entry.get("description") or "").strip()

        processed[name] = VaultMetadata(
            name=name,
            path=resolved_path,
            description=description,
            exists=resolved_path.is_dir(),
        )

    default_vault = raw_config.get("default")
    if default_vault is None and len(processed) == 1:
        default_vault = next(iter(processed))
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    server = _load_server_settings(raw_config.get("server"))
    logger.debug("Loaded %d vault(s) from %s", len(processed), config_path)
    return VaultConfiguration(default_vault=default_vault, vaults=processed, server=server)


def configured_path() -> Path:
    """Return the configuration path, honouring the environment override."""
    override = os.getenv(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else CONFIG_PATH


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Load the configuration once per process."""
    return load_vault_configuration(configured_path())


def resolve_vault(vault: Optional[str] = None) -> VaultMetadata:
    """Resolve which vault metadata should be used for an operation.

    Args:
        vault: Optional friendly vault name provided directly by the caller.

    Returns:
        The resolved :class:`VaultMetadata`, the configured default when ``vault``
        is omitted.

    Raises:
        InvalidParameterError: If the supplied ``vault`` name is not recognized.
    """
    configuration = get_vault_configuration()
    if vault:
        return configuration.get(vault)
    return configuration.get(configuration.default_vault)
