"""
Substring rules for User-Agent classification.

A rule pairs a lowercase substring with a partial set of properties. The
classifier walks the rules in order and, for every rule whose substring
occurs in the lowercased User-Agent, fills in the properties that are still
unset. Earlier rules therefore win field by field, and the order of the
table is part of its meaning: narrow rules (e.g. "trident/4.0" pinning the
MSIE version) must come before the general rule they refine ("msie").

Design Principles:
- Plain substring containment, no regex: cheap and predictable
- Tables are ordered sequences, never dicts
- Rules are frozen; a table is built once and only read afterwards
"""

import logging
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class DeviceClass(str, Enum):
    """Broad device category."""
    DESKTOP = "desktop"
    MOBILE = "mobile"


class InvalidRuleError(ValueError):
    """Raised when a rule can never match or carries a bad value."""
    pass


class RuleTableError(ValueError):
    """Raised when a rule table is not an ordered sequence of rules."""
    pass


@dataclass(frozen=True)
class Rule:
    """
    One substring rule.

    Attributes:
        match: Lowercase substring looked up in the lowercased User-Agent
        device_class: desktop or mobile
        agent_name: Browser/agent family name
        agent_version: Literal raw agent version ("" defers to the key)
        agent_version_key: Marker after which the agent version is read
        platform_name: Platform/OS name
        platform_version: Literal raw platform version
        platform_version_key: Marker after which the platform version is read
        device_name: Device family name

    A field left as None is not part of the rule's patch.
    """
    match: str
    device_class: Optional[DeviceClass] = None
    agent_name: Optional[str] = None
    agent_version: Optional[str] = None
    agent_version_key: Optional[str] = None
    platform_name: Optional[str] = None
    platform_version: Optional[str] = None
    platform_version_key: Optional[str] = None
    device_name: Optional[str] = None

    def __post_init__(self):
        if not self.match:
            raise InvalidRuleError("Rule match key must not be empty")
        if self.match != self.match.lower():
            raise InvalidRuleError(
                f"Rule match key {self.match!r} is not lowercase and can never match"
            )
        for name in ("agent_version_key", "platform_version_key"):
            marker = getattr(self, name)
            if marker is not None and marker != marker.lower():
                raise InvalidRuleError(
                    f"Rule {self.match!r}: {name} {marker!r} is not lowercase and can never match"
                )
        if self.device_class is not None and not isinstance(self.device_class, DeviceClass):
            # Accept the plain string values as well
            try:
                object.__setattr__(self, "device_class", DeviceClass(self.device_class))
            except ValueError:
                raise InvalidRuleError(
                    f"Rule {self.match!r} has unknown device class {self.device_class!r}"
                ) from None

    def patch(self) -> dict:
        """Return the fields this rule sets, in declaration order."""
        return {
            name: getattr(self, name)
            for name in PATCH_FIELDS
            if getattr(self, name) is not None
        }


PATCH_FIELDS = tuple(f.name for f in fields(Rule) if f.name != "match")


def validate_rules(rules: Sequence[Rule]) -> None:
    """
    Check that a rule table is usable by the classifier.

    Raises:
        RuleTableError: If the table is unordered (a mapping or a set), or
            holds something that is not a Rule
    """
    if isinstance(rules, (str, Mapping, Set)) or not isinstance(rules, Sequence):
        raise RuleTableError(
            f"Rule table must be an ordered sequence of Rule, got {type(rules).__name__}"
        )

    seen: set[str] = set()
    for position, rule in enumerate(rules):
        if not isinstance(rule, Rule):
            raise RuleTableError(
                f"Rule table entry {position} is {type(rule).__name__}, expected Rule"
            )
        if rule.match in seen:
            logger.warning(
                f"Rule table: duplicate match key {rule.match!r} at position {position}"
            )
        seen.add(rule.match)


_D = DeviceClass.DESKTOP
_M = DeviceClass.MOBILE

# =============================================================================
# DEFAULT RULE TABLE
# =============================================================================
# Order matters! Mobile markers come first so that a phone browser claiming
# to be "Safari" or "Firefox" still gets the mobile device class, and
# version overrides sit right before the family rule they refine.

DEFAULT_RULES: tuple[Rule, ...] = (
    # Mobile devices and browsers
    Rule("browserng", device_class=_M, agent_name="BrowserNG", agent_version_key="browserng/"),
    Rule("netfront", device_class=_M, agent_name="NetFront", agent_version_key="netfront/"),
    Rule("windows ce", device_class=_M),
    Rule("palmos", device_class=_M, platform_name="PalmOS"),
    Rule("palmsource", device_class=_M, platform_name="PalmSource"),
    Rule("series60", device_class=_M, platform_name="S60", platform_version_key="series60/"),
    Rule("symbian", device_class=_M, platform_name="Symbian"),
    Rule("android", platform_name="Android", platform_version_key="android "),
    Rule("midp", device_class=_M),
    Rule("up.browser", device_class=_M),
    Rule("siemens", device_class=_M),
    Rule("blackberry", device_class=_M, device_name="BlackBerry"),
    Rule("samsung", device_class=_M, device_name="Samsung"),
    Rule("sec-", device_class=_M, device_name="Samsung"),  # Samsung Electronics
    Rule("alcatel", device_class=_M),
    Rule("motorola", device_class=_M, device_name="Motorola"),
    Rule("mot-", device_class=_M, device_name="Motorola"),
    Rule("sagem", device_class=_M),
    Rule("telit", device_class=_M),
    Rule("lg", device_class=_M),
    Rule("philips", device_class=_M),
    Rule("hutchison", device_class=_M),
    Rule("panasonic", device_class=_M),
    Rule("sanyo", device_class=_M),
    Rule("qc", device_class=_M),
    Rule("configuration/cldc", device_class=_M),
    Rule("ericsson", device_class=_M, device_name="SonyEricsson"),
    Rule("sharp", device_class=_M),
    Rule("hitachi", device_class=_M),
    Rule("compel", device_class=_M),
    Rule("docomo", device_class=_M),
    Rule("portalmmm", device_class=_M),
    Rule("opwv-sdk", device_class=_M),
    Rule("ipad", device_class=_D, device_name="iPad"),  # tablets are not mobile
    Rule("iphone", device_class=_M, device_name="iPhone"),
    Rule("ipod", device_class=_M, device_name="iPod"),
    Rule("playstation portable", device_class=_M, device_name="PSP"),
    Rule("opera mobi", device_class=_M, agent_name="Opera"),
    Rule("opera mini", device_class=_M, agent_name="Opera Mini", agent_version_key="opera mini/"),
    Rule("htc_touch", device_class=_M),
    Rule("htc_diamond", device_class=_M),
    Rule("htc", device_class=_M, device_name="HTC"),
    Rule("nokia", device_class=_M, device_name="Nokia", platform_name="Symbian"),
    Rule("n900", device_class=_M, device_name="Nokia", platform_name="Linux", agent_name="Firefox"),
    Rule("maemo", device_class=_M, device_name="Nokia", platform_name="Linux", agent_name="Firefox"),
    Rule("mobile", device_class=_M),

    # Desktop browsers
    Rule("opera", device_class=_D, agent_name="Opera", agent_version_key="opera/"),
    Rule("firefox", device_class=_D, agent_name="Firefox", agent_version_key="firefox/"),
    # IE with Chrome Frame is treated as Chrome
    Rule("chromeframe", device_class=_D, agent_name="Chrome", agent_version="", agent_version_key="chromeframe/"),
    Rule("chrome", device_class=_D, agent_name="Chrome", agent_version="", agent_version_key="chrome/"),
    Rule("trident/4.0", agent_version="8.0"),  # IE8 in compatibility mode
    Rule("msie", device_class=_D, agent_name="MSIE", agent_version_key="msie "),
    Rule("safari/85", agent_version="1.0"),
    Rule("safari/125", agent_version="1.2"),
    Rule("safari/312", agent_version="1.3"),
    Rule("safari/41", agent_version="2.0"),
    Rule("safari", device_class=_D, agent_name="Safari", agent_version_key="version/"),

    # Desktop platforms
    Rule("linux", platform_name="Linux"),
    Rule("mac", platform_name="Mac OS", device_name="Mac", platform_version_key="mac os x "),
    Rule("nt ", platform_name="Windows", platform_version_key="nt "),
    Rule("windows", platform_name="Windows"),
    Rule("bsd", platform_name="Unix"),
    Rule("x11", platform_name="Linux"),
)
