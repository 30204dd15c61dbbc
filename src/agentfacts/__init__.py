"""
User-Agent classification for agentfacts.

Usage:
    from agentfacts import detect_user_agent

    agent = detect_user_agent(request.headers.get("user-agent", ""))
    if agent.is_ie() and agent.version_is_less_than("9"):
        ...

    # Or let FastAPI do it per request
    from agentfacts import create_useragent_router

    app.include_router(create_useragent_router(), prefix="/useragent")
"""

from .classifier import AgentProperties, classify
from .config import AgentFactsConfig, ConfigError
from .routes import create_useragent_router, user_agent_dependency
from .rules import DEFAULT_RULES, DeviceClass, InvalidRuleError, Rule, RuleTableError
from .user_agent import UserAgent, detect_user_agent
from .versions import compare_versions, normalize_version, resolve_version_token

__version__ = "0.1.0"
__all__ = [
    "detect_user_agent", "UserAgent", "AgentProperties", "classify",
    "Rule", "DEFAULT_RULES", "DeviceClass",
    "normalize_version", "compare_versions", "resolve_version_token",
    "AgentFactsConfig", "create_useragent_router", "user_agent_dependency",
    "ConfigError", "InvalidRuleError", "RuleTableError",
]
