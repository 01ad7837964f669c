"""
Feedback configuration loader.

Loads and parses custom rulesets from YAML configuration files.
"""

import yaml
from typing import Dict, Any, List, Optional
from pathlib import Path
from pydantic import BaseModel, Field, ValidationError

from modules.feedback.core.exceptions import ConfigurationException
from shared.utils.config import settings
from shared.utils.logger import setup_logger, log_error

logger = setup_logger(__name__)


class RuleConfig(BaseModel):
    """Schema for one rule entry in a YAML ruleset."""

    id: str = Field(..., min_length=1, description="Rule id, unique within its ruleset")
    label: str = Field(..., description="Human-readable requirement text")
    check: str = Field(..., description="Registered check name (pattern, min_length, luhn, ...)")
    params: Dict[str, Any] = Field(default_factory=dict, description="Check parameters")
    required: bool = False
    hint: Optional[str] = None
    error_message: Optional[str] = None


class FeedbackConfigLoader:
    """
    Loads feedback configuration from YAML files.

    Supports:
    - Global settings (generic message template)
    - Named custom rulesets
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to rules YAML file
                        If None, uses FEEDBACK_RULES_PATH from settings
        """
        if config_path is None:
            config_path = settings.FEEDBACK_RULES_PATH

        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            yaml.YAMLError: If YAML parsing fails
            ConfigurationException: If the document is not a mapping
        """
        if self.config_path is None:
            self._config = self._get_default_config()
            return self._config

        if not self.config_path.exists():
            logger.warning(
                f"Feedback config file not found: {self.config_path}. "
                "Using empty configuration."
            )
            self._config = self._get_default_config()
            return self._config

        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            log_error(logger, e, f"Failed to parse feedback config {self.config_path}")
            raise

        if not isinstance(config, dict):
            raise ConfigurationException(
                f"Feedback config {self.config_path} must be a mapping, got {type(config).__name__}"
            )

        self._config = config
        logger.info(f"Loaded feedback config from: {self.config_path}")
        return self._config

    def get_rulesets(self) -> Dict[str, List[RuleConfig]]:
        """
        Get all custom rulesets, validated against RuleConfig.

        Returns:
            Mapping of ruleset name to ordered rule configs

        Raises:
            ConfigurationException: If a rule entry is malformed
        """
        if self._config is None:
            self.load()

        configured = self._config.get('rulesets') or {}
        if not isinstance(configured, dict):
            raise ConfigurationException(
                f"'rulesets' must map ruleset names to rule lists, got {type(configured).__name__}"
            )

        rulesets: Dict[str, List[RuleConfig]] = {}
        for name, entries in configured.items():
            if entries is not None and not isinstance(entries, list):
                raise ConfigurationException(
                    f"Ruleset '{name}' must be a list of rules, got {type(entries).__name__}"
                )
            try:
                rulesets[name] = [RuleConfig(**entry) for entry in entries or []]
            except (TypeError, ValidationError) as e:
                raise ConfigurationException(
                    f"Invalid rule definition in ruleset '{name}': {e}"
                ) from e
        return rulesets

    def get_global_settings(self) -> Dict[str, Any]:
        """
        Get global feedback settings.

        Returns:
            Global settings dictionary
        """
        if self._config is None:
            self.load()

        global_settings = self._config.get('global') or {}
        if not isinstance(global_settings, dict):
            raise ConfigurationException(
                f"'global' must be a mapping, got {type(global_settings).__name__}"
            )
        return global_settings

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration when no file is configured.

        Returns:
            Default configuration dictionary
        """
        return {
            'global': {
                'generic_message': settings.FEEDBACK_GENERIC_MESSAGE,
            },
            'rulesets': {}
        }

    def reload(self) -> Dict[str, Any]:
        """
        Reload configuration from file.

        Returns:
            Updated configuration dictionary
        """
        self._config = None
        return self.load()
