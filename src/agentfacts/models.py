"""Pydantic models for the User-Agent API."""

from enum import Enum

from pydantic import BaseModel

from .user_agent import UserAgent
from .versions import format_version


class VersionTarget(str, Enum):
    """Which version a version check runs against."""
    AGENT = "agent"
    PLATFORM = "platform"


class UserAgentResponse(BaseModel):
    """Classified User-Agent of the current request."""

    agent_name: str
    agent_version: str  # major.minor.patch
    platform_name: str
    platform_version: str
    device_name: str
    device_class: str  # desktop, mobile

    # Derived checks
    is_mobile_device: bool = False
    is_tablet: bool = False
    is_ios: bool = False

    summary: str = ""

    @classmethod
    def from_user_agent(cls, agent: UserAgent) -> "UserAgentResponse":
        props = agent.properties
        return cls(
            agent_name=props.agent_name,
            agent_version=format_version(props.agent_version),
            platform_name=props.platform_name,
            platform_version=format_version(props.platform_version),
            device_name=props.device_name,
            device_class=props.device_class.value,
            is_mobile_device=agent.is_mobile_device(),
            is_tablet=agent.is_tablet(),
            is_ios=agent.is_ios(),
            summary=agent.describe(),
        )


class VersionCheckResponse(BaseModel):
    """Result of comparing a version query against the detected version."""

    query: str
    target: VersionTarget
    version: str  # detected major.minor.patch
    is_version: bool
    at_least: bool
    less_than: bool
