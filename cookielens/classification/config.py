"""Configuration for the cookie classifier with proper precedence handling.

Configuration sources, highest precedence first:
CLI overrides > environment variables > explicit config file >
auto-discovered config file > defaults
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .classifier import CookieClassifier
from .knowledge_base import KnowledgeBase, load_default_knowledge_base, load_knowledge_base
from .scoring import HeuristicScorer

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json", "yaml")


def _split_list(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    if value is None:
        return []
    return value


class ClassifierConfiguration(BaseModel):
    """Complete classifier configuration."""

    knowledge_base_path: Optional[Path] = Field(
        default=None,
        description="Cookie dataset file; the bundled dataset is used when unset"
    )
    extra_ad_domains: List[str] = Field(
        default_factory=list,
        description="Ad network domains added to the built-in set"
    )
    extra_tracker_prefixes: List[str] = Field(
        default_factory=list,
        description="Tracker cookie name prefixes added to the built-in set"
    )
    log_level: str = Field(default="WARNING", description="Logging level")
    output_format: str = Field(default="text", description="Report format")

    # Metadata
    config_file_path: Optional[Path] = Field(default=None, description="Source config file")
    loaded_from: List[str] = Field(default_factory=list, description="Configuration sources")

    @field_validator('extra_ad_domains', 'extra_tracker_prefixes', mode='before')
    @classmethod
    def split_comma_lists(cls, v):
        return _split_list(v)

    @field_validator('extra_ad_domains')
    @classmethod
    def normalize_domains(cls, v):
        return [domain.strip().lstrip('.').lower() for domain in v if domain.strip()]

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator('output_format')
    @classmethod
    def validate_output_format(cls, v):
        fmt = v.lower()
        if fmt not in OUTPUT_FORMATS:
            raise ValueError("output_format must be one of: text, json, yaml")
        return fmt


class ConfigurationLoader:
    """Loads and merges configuration from multiple sources with proper precedence."""

    ENV_PREFIX = "COOKIELENS_"

    # Searched in order
    DEFAULT_CONFIG_FILES = [
        "cookielens.yaml",
        "cookielens.yml",
        ".cookielens.yaml",
        ".cookielens.yml",
        "cookielens.json",
        ".cookielens.json"
    ]

    ENV_MAPPING = {
        "KNOWLEDGE_BASE": "knowledge_base_path",
        "EXTRA_AD_DOMAINS": "extra_ad_domains",
        "EXTRA_TRACKER_PREFIXES": "extra_tracker_prefixes",
        "LOG_LEVEL": "log_level",
        "OUTPUT_FORMAT": "output_format",
    }

    def __init__(self):
        self.loaded_sources: List[str] = []

    def load_configuration(
        self,
        config_file: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
        search_paths: Optional[List[Path]] = None
    ) -> ClassifierConfiguration:
        """Load configuration with proper precedence.

        Args:
            config_file: Explicitly specified config file
            overrides: CLI flag overrides
            search_paths: Paths to search for config files

        Returns:
            Merged configuration

        Raises:
            FileNotFoundError: If an explicit config file does not exist
            ValueError: If a config file cannot be parsed
        """
        self.loaded_sources = ["defaults"]
        config_data: Dict[str, Any] = {}

        if config_file:
            if not config_file.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            config_data.update(self._load_config_file(config_file))
            self.loaded_sources.append(f"config file: {config_file}")
        else:
            discovered = self._discover_config_file(search_paths or [Path.cwd()])
            if discovered is not None:
                config_file = discovered
                config_data.update(self._load_config_file(discovered))
                self.loaded_sources.append(f"auto-discovered: {discovered}")

        env_config = self._load_environment_variables()
        if env_config:
            config_data.update(env_config)
            self.loaded_sources.append("environment variables")

        if overrides:
            config_data.update({k: v for k, v in overrides.items() if v is not None})
            self.loaded_sources.append("CLI flags")

        config_data["loaded_from"] = self.loaded_sources
        config_data["config_file_path"] = config_file

        config = ClassifierConfiguration(**config_data)
        logger.debug(f"Configuration loaded from: {' -> '.join(self.loaded_sources)}")
        return config

    def _discover_config_file(self, search_paths: List[Path]) -> Optional[Path]:
        for search_path in search_paths:
            for config_filename in self.DEFAULT_CONFIG_FILES:
                config_path = search_path / config_filename
                if config_path.is_file():
                    return config_path
        return None

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file."""
        suffix = config_path.suffix.lower()
        if suffix not in ('.yaml', '.yml', '.json'):
            raise ValueError(f"Unsupported config file format: {config_path.suffix}")

        try:
            content = config_path.read_text(encoding='utf-8')
            if suffix == '.json':
                data = json.loads(content)
            else:
                data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

        # Relative dataset paths are relative to the config file
        kb_path = data.get("knowledge_base_path")
        if kb_path and not Path(kb_path).is_absolute():
            data["knowledge_base_path"] = config_path.parent / kb_path

        return data

    def _load_environment_variables(self) -> Dict[str, Any]:
        config = {}
        for env_suffix, field_name in self.ENV_MAPPING.items():
            env_value = os.getenv(f"{self.ENV_PREFIX}{env_suffix}")
            if env_value is not None and env_value != "":
                config[field_name] = env_value
        return config


def load_configuration(
    config_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_paths: Optional[List[Path]] = None
) -> ClassifierConfiguration:
    """Convenience function to load configuration."""
    loader = ConfigurationLoader()
    return loader.load_configuration(config_file, overrides, search_paths)


def print_configuration(config: ClassifierConfiguration, format: str = "yaml") -> str:
    """Render configuration for debugging.

    Args:
        config: Configuration to print
        format: Output format (yaml, json)

    Returns:
        Formatted configuration string
    """
    config_dict = config.model_dump(
        mode="json",
        exclude={'loaded_from', 'config_file_path'},
    )

    if format.lower() == "json":
        return json.dumps(config_dict, indent=2)
    return yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=True)


def load_configured_knowledge_base(config: ClassifierConfiguration) -> KnowledgeBase:
    if config.knowledge_base_path is not None:
        return load_knowledge_base(config.knowledge_base_path)
    return load_default_knowledge_base()


def build_classifier(config: ClassifierConfiguration) -> CookieClassifier:
    """Create a classifier wired according to the configuration.

    Raises:
        KnowledgeBaseFormatError: If the configured dataset is unusable
    """
    scorer = HeuristicScorer(
        ad_domains=config.extra_ad_domains,
        tracker_prefixes=config.extra_tracker_prefixes,
    )
    return CookieClassifier(knowledge_base=load_configured_knowledge_base(config), scorer=scorer)
