"""
User-Agent recognition.

The UserAgent class represents the agent behind a request (a desktop
browser, a mobile browser, or anything else) and answers questions about its
name, version, platform and device.

The facts come from the User-Agent string the client sent, so they may not
match the real agent (spoofing is not detected). Keep User-Agent checks in
this class instead of scattering substring tests through the codebase: if a
check is missing, add it here along with a test.

Checks are grouped as:
- Agent: is_agent(), is_firefox(), version_is_at_least(), ...
- Platform: is_platform(), is_windows(), platform_version_is_less_than(), ...
- Device class: is_mobile_device(), is_tablet(), is_ios(), ...
- Device: is_device(), is_iphone(), is_blackberry(), ...
"""

import logging
from typing import Sequence

from .classifier import AgentProperties, classify
from .rules import DEFAULT_RULES, DeviceClass, Rule
from .versions import compare_versions

logger = logging.getLogger(__name__)


class UserAgent:
    """Read-only query interface over one classified User-Agent."""

    def __init__(self, properties: AgentProperties):
        self._properties = properties

    @classmethod
    def from_string(cls, user_agent: str, rules: Sequence[Rule] = DEFAULT_RULES) -> "UserAgent":
        """Classify a User-Agent string and wrap the result."""
        return cls(classify(user_agent, rules))

    @property
    def properties(self) -> AgentProperties:
        return self._properties

    def __repr__(self) -> str:
        return f"<UserAgent {self.describe()}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, UserAgent):
            return NotImplemented
        return self._properties == other._properties

    def __hash__(self) -> int:
        return hash(self._properties)

    def describe(self) -> str:
        """Human readable one-liner, e.g. "Firefox 3.5.0 on Linux 0.0.0 on a PC (desktop)"."""
        return self._properties.describe()

    def to_dict(self) -> dict:
        return self._properties.to_dict()

    # =========================================================================
    # Agent
    # =========================================================================

    def is_agent(self, name: str) -> bool:
        """
        Check whether the agent has the given name.

        Args:
            name: Agent name like "MSIE", "Firefox", "Safari", "Chrome",
                "Opera" or "Opera Mini"
        """
        return self._properties.agent_name == name

    def is_ie(self) -> bool:
        return self.is_agent("MSIE")

    def is_firefox(self) -> bool:
        return self.is_agent("Firefox")

    def is_safari(self) -> bool:
        return self.is_agent("Safari")

    def is_chrome(self) -> bool:
        return self.is_agent("Chrome")

    def is_opera(self) -> bool:
        """Opera, including Opera Mini."""
        return self.is_agent("Opera") or self.is_agent("Opera Mini")

    def is_opera_mini(self) -> bool:
        return self.is_agent("Opera Mini")

    def is_version(self, version: str) -> bool:
        """
        Check whether the agent version matches, at the precision given.

        With Firefox 3.5, is_version("3") is True but is_version("3.0") is
        False. At most 3 levels ("major.minor.patch") are compared.
        """
        return compare_versions(version, self._properties.agent_version, False, True, False)

    def version_is_at_least(self, version: str) -> bool:
        """Check whether the agent version is the same as or higher than the one given."""
        return compare_versions(version, self._properties.agent_version, True, True, False)

    def version_is_less_than(self, version: str) -> bool:
        """Check whether the agent version is older than the one given."""
        return compare_versions(version, self._properties.agent_version, False, False, True)

    # =========================================================================
    # Platform
    # =========================================================================

    def is_platform(self, platform: str) -> bool:
        """
        Check whether the agent runs on the given platform.

        Args:
            platform: Platform name like "Windows", "Linux", "Mac OS",
                "Symbian" or "Android"
        """
        return self._properties.platform_name == platform

    def is_windows(self) -> bool:
        return self.is_platform("Windows")

    def is_linux(self) -> bool:
        return self.is_platform("Linux")

    def is_mac(self) -> bool:
        return self.is_platform("Mac OS")

    def is_android(self) -> bool:
        return self.is_platform("Android")

    def is_android_tablet(self) -> bool:
        """Android without a mobile marker is reported as a tablet."""
        return self.is_android() and not self.is_mobile_device()

    def is_platform_version(self, version: str) -> bool:
        """Check whether the platform version matches, at the precision given."""
        return compare_versions(version, self._properties.platform_version, False, True, False)

    def platform_version_is_at_least(self, version: str) -> bool:
        return compare_versions(version, self._properties.platform_version, True, True, False)

    def platform_version_is_less_than(self, version: str) -> bool:
        return compare_versions(version, self._properties.platform_version, False, False, True)

    # =========================================================================
    # Device class
    # =========================================================================

    def is_desktop_browser(self) -> bool:
        return self._properties.device_class == DeviceClass.DESKTOP

    def is_mobile_device(self) -> bool:
        """
        Check whether this is a mobile device (phone, iPod Touch, ...).

        Tablets are *not* mobile devices; use is_tablet() for those.
        """
        return self._properties.device_class == DeviceClass.MOBILE

    def is_tablet(self) -> bool:
        return self.is_ipad() or self.is_android_tablet()

    def is_ios(self) -> bool:
        """iPhone, iPod Touch or iPad."""
        return (self.is_mobile_device() and self.is_mac()) or self.is_ipad()

    # =========================================================================
    # Device
    # =========================================================================

    def is_device(self, device: str) -> bool:
        """
        Check whether the agent runs on the given device.

        Args:
            device: Device name like "iPhone", "BlackBerry" or "PSP"
        """
        return self._properties.device_name == device

    def is_iphone(self) -> bool:
        """iPhone only; is_ios() also covers the iPod Touch."""
        return self.is_device("iPhone")

    def is_ipad(self) -> bool:
        return self.is_device("iPad")

    def is_blackberry(self) -> bool:
        return self.is_device("BlackBerry")

    def is_windows_phone(self) -> bool:
        """Windows Phone, or the older Windows Mobile."""
        return self.is_mobile_device() and self.is_windows()


def detect_user_agent(
    user_agent: str,
    rules: Sequence[Rule] = DEFAULT_RULES,
    log: bool = True,
) -> UserAgent:
    """
    Classify a User-Agent string.

    Args:
        user_agent: The User-Agent header value (None/empty gives defaults)
        rules: Ordered rule table
        log: Emit the detected agent at DEBUG level

    Returns:
        UserAgent for querying the classified facts
    """
    agent = UserAgent.from_string(user_agent or "", rules)
    if log:
        logger.debug(f"Detected User-Agent: {agent.describe()}")
    return agent
