"""
Configuration Management for archscribe

Loads configuration from ~/.archscribe/config.json and environment variables.
"""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field

logger = logging.getLogger("archscribe.common.config")

# Default config paths
CONFIG_DIR = Path.home() / ".archscribe"
CONFIG_PATH = CONFIG_DIR / "config.json"

DEFAULT_RECORD_THRESHOLD = 0.4
DEFAULT_PROJECT_DECISION_THRESHOLD = 0.2


@dataclass
class ClassifierConfig:
    """Decision classifier thresholds"""
    record_threshold: float = DEFAULT_RECORD_THRESHOLD  # at or above: record an ADR
    project_decision_threshold: float = DEFAULT_PROJECT_DECISION_THRESHOLD  # at or above: defer to project decision


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    stream: str = ""  # "" = automatic, "stdout" = opt in to stdout in MCP mode
    debug: bool = False


@dataclass
class ServerConfig:
    """MCP server configuration"""
    name: str = "archscribe"


@dataclass
class ArchScribeConfig:
    """Main archscribe configuration"""
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def _section(data: dict, name: str) -> dict:
    """Return a config section, treating null or non-object sections as empty"""
    section = data.get(name)
    return section if isinstance(section, dict) else {}


def _parse_classifier_config(data: dict) -> ClassifierConfig:
    """Parse classifier section from config dict"""
    classifier_data = _section(data, "classifier")
    return ClassifierConfig(
        record_threshold=float(classifier_data.get("record_threshold", DEFAULT_RECORD_THRESHOLD)),
        project_decision_threshold=float(
            classifier_data.get("project_decision_threshold", DEFAULT_PROJECT_DECISION_THRESHOLD)
        ),
    )


def _parse_logging_config(data: dict) -> LoggingConfig:
    """Parse logging section from config dict"""
    logging_data = _section(data, "logging")
    return LoggingConfig(
        level=str(logging_data.get("level", "INFO")).upper(),
        stream=logging_data.get("stream", ""),
        debug=bool(logging_data.get("debug", False)),
    )


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse server section from config dict"""
    server_data = _section(data, "server")
    return ServerConfig(
        name=server_data.get("name", "archscribe"),
    )


def load_config() -> ArchScribeConfig:
    """
    Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (~/.archscribe/config.json)
    3. Default values
    """
    config = ArchScribeConfig()

    # Load from config file if exists
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH) as f:
                data = json.load(f)

            if isinstance(data, dict):
                config.classifier = _parse_classifier_config(data)
                config.logging = _parse_logging_config(data)
                config.server = _parse_server_config(data)
            else:
                logger.warning("Ignoring config file %s: top level is not a JSON object", CONFIG_PATH)
        except (json.JSONDecodeError, IOError, TypeError, ValueError) as e:
            logger.warning("Failed to load config file %s: %s", CONFIG_PATH, e)

    # Environment variable overrides
    if os.getenv("ARCHSCRIBE_RECORD_THRESHOLD"):
        config.classifier.record_threshold = float(os.getenv("ARCHSCRIBE_RECORD_THRESHOLD"))
    if os.getenv("ARCHSCRIBE_PROJECT_DECISION_THRESHOLD"):
        config.classifier.project_decision_threshold = float(os.getenv("ARCHSCRIBE_PROJECT_DECISION_THRESHOLD"))

    if os.getenv("ARCHSCRIBE_LOG_LEVEL"):
        config.logging.level = os.getenv("ARCHSCRIBE_LOG_LEVEL").upper()
    if os.getenv("MCP_LOG_STREAM"):
        config.logging.stream = os.getenv("MCP_LOG_STREAM")
    if os.getenv("DEBUG"):
        # Exact match, same rule as the log handler
        config.logging.debug = os.getenv("DEBUG") == "true"

    if os.getenv("ARCHSCRIBE_SERVER_NAME"):
        config.server.name = os.getenv("ARCHSCRIBE_SERVER_NAME")

    return config


def save_config(config: ArchScribeConfig) -> None:
    """Save configuration to file."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "classifier": {
            "record_threshold": config.classifier.record_threshold,
            "project_decision_threshold": config.classifier.project_decision_threshold,
        },
        "logging": {
            "level": config.logging.level,
            "stream": config.logging.stream,
            "debug": config.logging.debug,
        },
        "server": {
            "name": config.server.name,
        },
    }

    with open(CONFIG_PATH, "w") as f:
        json.dump(data, f, indent=2)

    # Set secure permissions
    CONFIG_PATH.chmod(0o600)
