"""
FastAPI routes exposing the detected User-Agent.

The User-Agent is classified at most once per request and config; the result
is kept on request.state so route handlers and other dependencies share it.

Usage:
    from agentfacts import create_useragent_router

    app.include_router(create_useragent_router(), prefix="/useragent")
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from .config import AgentFactsConfig
from .models import UserAgentResponse, VersionCheckResponse, VersionTarget
from .user_agent import UserAgent, detect_user_agent
from .versions import format_version

logger = logging.getLogger(__name__)


def user_agent_dependency(config: AgentFactsConfig) -> Callable[[Request], UserAgent]:
    """
    Build a FastAPI dependency returning the request's classified User-Agent.

    Usage:
        get_user_agent = user_agent_dependency(AgentFactsConfig())

        @app.get("/download")
        async def download(agent: UserAgent = Depends(get_user_agent)):
            ...
    """

    def get_user_agent(request: Request) -> UserAgent:
        # One entry per config, so routers with different settings don't share results
        cache = getattr(request.state, "user_agents", None)
        if cache is None:
            cache = request.state.user_agents = {}

        agent = cache.get(id(config))
        if agent is not None:
            return agent

        raw = request.headers.get(config.header_name)
        if raw is None:
            logger.debug(f"Request has no {config.header_name} header")

        agent = detect_user_agent(
            config.clip(raw),
            config.rules,
            log=config.log_detections,
        )
        cache[id(config)] = agent
        return agent

    return get_user_agent


def create_useragent_router(config: AgentFactsConfig | None = None) -> APIRouter:
    """
    Create the User-Agent router.

    Args:
        config: Detection settings (defaults to AgentFactsConfig())

    Returns:
        APIRouter with GET /, GET /summary and GET /version
    """
    config = config or AgentFactsConfig()
    router = APIRouter(tags=["useragent"])
    get_user_agent = user_agent_dependency(config)

    @router.get("/", response_model=UserAgentResponse)
    async def user_agent_info(agent: UserAgent = Depends(get_user_agent)):
        return UserAgentResponse.from_user_agent(agent)

    @router.get("/summary", response_class=PlainTextResponse)
    async def user_agent_summary(agent: UserAgent = Depends(get_user_agent)):
        return agent.describe()

    @router.get("/version", response_model=VersionCheckResponse)
    async def version_check(
        query: str = Query(..., min_length=1, max_length=64),
        target: VersionTarget = VersionTarget.AGENT,
        agent: UserAgent = Depends(get_user_agent),
    ):
        if target == VersionTarget.PLATFORM:
            return VersionCheckResponse(
                query=query,
                target=target,
                version=format_version(agent.properties.platform_version),
                is_version=agent.is_platform_version(query),
                at_least=agent.platform_version_is_at_least(query),
                less_than=agent.platform_version_is_less_than(query),
            )

        return VersionCheckResponse(
            query=query,
            target=target,
            version=format_version(agent.properties.agent_version),
            is_version=agent.is_version(query),
            at_least=agent.version_is_at_least(query),
            less_than=agent.version_is_less_than(query),
        )

    return router
