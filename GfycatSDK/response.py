from asyncio import to_thread
from typing import Any

import httpx


class APIResponse:
    response: httpx.Response
    content_type: str

    def __init__(self, response: httpx.Response):
        self.response = response
        self.content_type = response.headers.get('Content-Type', '')

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def is_success(self) -> bool:
        return self.response.is_success

    async def is_json(self):
        """Standalone parser to make customization easy"""
        if 'application/json' in self.content_type:
            return True
        return False

    async def async_parse_content(self) -> Any:
        """Parse the body by content type; raises ValueError when a JSON body is malformed"""
        if not self.response.content:
            return None
        if await self.is_json():
            return await to_thread(self.response.json)
        if 'text/' in self.content_type:
            return self.response.text
        return self.response.content

    async def async_parse_error_content(self) -> Any:
        """Best-effort parse for error responses, falling back to the raw text"""
        try:
            return await self.async_parse_content()
        except ValueError:
            return self.response.text
