"""Helpers for setting up a aiohttp session (and related)."""

from __future__ import annotations

import sys
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import aiohttp
from aiohttp.hdrs import USER_AGENT

from ytmusic_bridge.constants import APPLICATION_NAME

from .json import json_dumps, json_loads

if TYPE_CHECKING:
    from aiohttp.typedefs import JSONDecoder

MAXIMUM_CONNECTIONS_PER_HOST = 20


def create_clientsession(version: str = "0.0.0", **kwargs: Any) -> aiohttp.ClientSession:
    """Create a new ClientSession with kwargs, i.e. for cookies."""
    clientsession = aiohttp.ClientSession(
        connector=aiohttp.TCPConnector(limit_per_host=MAXIMUM_CONNECTIONS_PER_HOST),
        json_serialize=json_dumps,
        response_class=BridgeClientResponse,
        **kwargs,
    )
    # Identify ourselves unless a request overrides the header explicitly
    user_agent = (
        f"{APPLICATION_NAME}/{version} "
        f"aiohttp/{aiohttp.__version__} Python/{sys.version_info[0]}.{sys.version_info[1]}"
    )
    clientsession._default_headers = MappingProxyType(  # type: ignore[assignment]
        {USER_AGENT: user_agent},
    )
    return clientsession


class BridgeClientResponse(aiohttp.ClientResponse):
    """aiohttp.ClientResponse with a json method that uses json_loads by default."""

    async def json(
        self,
        *args: Any,
        loads: JSONDecoder = json_loads,
        **kwargs: Any,
    ) -> Any:
        """Send a json request and parse the json response."""
        return await super().json(*args, loads=loads, **kwargs)
