"""
Configuration for agentfacts.
"""
import logging
from dataclasses import dataclass
from typing import Sequence

from .rules import DEFAULT_RULES, Rule, validate_rules

logger = logging.getLogger(__name__)

DEFAULT_HEADER_NAME = "user-agent"

# Longest User-Agent we classify; anything beyond is cut off
DEFAULT_MAX_LENGTH = 512


class ConfigError(ValueError):
    """Raised when an AgentFactsConfig value is unusable."""
    pass


@dataclass
class AgentFactsConfig:
    """Configuration for User-Agent detection on incoming requests."""

    # Ordered rule table, earlier rules win per field
    rules: Sequence[Rule] = DEFAULT_RULES

    # Request header holding the User-Agent
    header_name: str = DEFAULT_HEADER_NAME

    # Log every detected User-Agent at DEBUG level
    log_detections: bool = True

    # Input bound
    max_length: int = DEFAULT_MAX_LENGTH

    def __post_init__(self):
        """Validate configuration after initialization."""
        validate_rules(self.rules)

        if not self.header_name or not self.header_name.strip():
            raise ConfigError("header_name must not be empty")
        self.header_name = self.header_name.strip().lower()

        if self.max_length <= 0:
            raise ConfigError(
                f"max_length must be positive. Got {self.max_length}."
            )

        if self.rules is not DEFAULT_RULES:
            logger.debug(f"Using custom rule table with {len(self.rules)} rules")

    @property
    def uses_default_rules(self) -> bool:
        """Check if the shipped rule table is in use."""
        return self.rules is DEFAULT_RULES

    def clip(self, user_agent: str | None) -> str:
        """Return the User-Agent bounded to max_length ("" for None)."""
        if not user_agent:
            return ""
        return user_agent[: self.max_length]
