import logging
import typing

import aiohttp

from crowallet import exceptions
from crowallet.config import config

log = logging.getLogger(__name__)


async def async_request(
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, typing.Any] | None = None,
) -> typing.Any:
    if not headers:
        headers = {}
    if not params:
        params = {}
    timeout = aiohttp.ClientTimeout(total=config.http_timeout_seconds)
    async with aiohttp.ClientSession(headers=headers, timeout=timeout) as session:
        async with session.get(url, params=params) as response:
            if response.status != 200:
                log.warning(f"Got response status {response.status} from {url}")
                raise exceptions.InvalidHttpResponseError(response.status, url)
            return await response.json()
