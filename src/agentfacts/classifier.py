"""
Rule-based User-Agent classification.

classify() folds an ordered rule table over a User-Agent string into a
WorkingPatch (first match wins, per field), resolves the two version fields
and fills every remaining gap with a default. The result is an immutable
AgentProperties record that is fully populated, whatever the input.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .rules import DeviceClass, Rule
from .versions import (
    ZERO_VERSION,
    VersionTriple,
    format_version,
    normalize_version,
    resolve_version_token,
)


@dataclass(frozen=True)
class AgentProperties:
    """
    Classified User-Agent facts.

    Attributes:
        device_class: desktop or mobile
        agent_name: Browser/agent family (e.g. "Firefox", "MSIE")
        agent_version: (major, minor, patch) of the agent
        platform_name: Platform (e.g. "Windows", "Mac OS", "Android")
        platform_version: (major, minor, patch) of the platform
        device_name: Device family (e.g. "PC", "iPhone", "iPad")
    """
    device_class: DeviceClass = DeviceClass.DESKTOP
    agent_name: str = "Unknown"
    agent_version: VersionTriple = ZERO_VERSION
    platform_name: str = "Unknown"
    platform_version: VersionTriple = ZERO_VERSION
    device_name: str = "PC"

    def describe(self) -> str:
        """One-line human readable summary, used for diagnostics."""
        article = "an " if self.device_name[:1] == "i" else "a "
        return (
            f"{self.agent_name} {format_version(self.agent_version)}"
            f" on {self.platform_name} {format_version(self.platform_version)}"
            f" on {article}{self.device_name} ({self.device_class.value})"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "device_class": self.device_class.value,
            "agent_name": self.agent_name,
            "agent_version": format_version(self.agent_version),
            "platform_name": self.platform_name,
            "platform_version": format_version(self.platform_version),
            "device_name": self.device_name,
        }


@dataclass
class WorkingPatch:
    """Scratch record filled while walking the rules; None means unset."""
    device_class: Optional[DeviceClass] = None
    agent_name: Optional[str] = None
    agent_version: Optional[str] = None
    agent_version_key: Optional[str] = None
    platform_name: Optional[str] = None
    platform_version: Optional[str] = None
    platform_version_key: Optional[str] = None
    device_name: Optional[str] = None

    def absorb(self, rule: Rule) -> None:
        """Copy the rule's fields into this patch, skipping fields already set."""
        for name, value in rule.patch().items():
            if getattr(self, name) is None:
                setattr(self, name, value)


def _resolve_version(raw: Optional[str], marker_key: Optional[str], ua_lower: str) -> VersionTriple:
    """Pick the literal version or read it from the marker, then normalize."""
    if marker_key is not None and not raw:
        raw = resolve_version_token(marker_key, ua_lower)

    if raw is None:
        return ZERO_VERSION
    return normalize_version(raw)


def classify(identity: str, rules: Sequence[Rule]) -> AgentProperties:
    """
    Classify a User-Agent string using an ordered rule table.

    Args:
        identity: The User-Agent header value
        rules: Ordered rules; earlier rules take precedence per field

    Returns:
        AgentProperties with every field populated (defaults where no rule
        matched)

    Examples:
        With the default rule table, "Mozilla/5.0 (Windows NT 10.0; rv:120.0)
        Gecko/20100101 Firefox/120.0" classifies as Firefox (120, 0, 0) on
        Windows (10, 0, 0), device "PC", desktop.
    """
    ua_lower = (identity or "").lower()

    patch = WorkingPatch()
    for rule in rules:
        if rule.match in ua_lower:
            patch.absorb(rule)

    agent_version = _resolve_version(patch.agent_version, patch.agent_version_key, ua_lower)
    platform_version = _resolve_version(patch.platform_version, patch.platform_version_key, ua_lower)

    defaults = AgentProperties()
    return AgentProperties(
        device_class=patch.device_class or defaults.device_class,
        agent_name=patch.agent_name if patch.agent_name is not None else defaults.agent_name,
        agent_version=agent_version,
        platform_name=patch.platform_name if patch.platform_name is not None else defaults.platform_name,
        platform_version=platform_version,
        device_name=patch.device_name if patch.device_name is not None else defaults.device_name,
    )
