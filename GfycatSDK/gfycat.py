from typing import Any, Optional, Sequence, Union

from .client import APIClient
from .exceptions import InvalidOptionsError
from .request import FORM_CONTENT_TYPE, RequestDescriptor
from .utils import with_callback


def _require(name: str, value: Any):
    if value is None or value == "":
        raise InvalidOptionsError(f"Please provide {name}")
    return value


def _default(value: Any, default: Any) -> Any:
    return default if value is None else value


class GfycatClient(APIClient):
    """
    Gfycat API client.

    Every endpoint method can be awaited directly, or given a ``callback`` keyword that receives
    ``(error, result)`` once the request completes:

        async with GfycatClient({"client_id": "...", "client_secret": "..."}) as client:
            trending = await client.get_trending(count=10)
            client.search("cats", callback=lambda err, res: ...)

    Optional parameters left as None are omitted from the request.
    """

    @with_callback
    async def get_categories(self, gfy_count: Optional[int] = None, count: Optional[int] = None,
                             cursor: Optional[str] = None, locale: Optional[str] = None):
        """Retrieve reaction categories, each populated with ``gfy_count`` GIFs (1 by default)"""
        return await self.request(RequestDescriptor(
            api="/reactions",
            endpoint="/populated",
            query={
                "gfyCount": _default(gfy_count, 1),
                "count": count,
                "cursor": cursor,
                "locale": locale,
            },
        ))

    @with_callback
    async def get_trending_categories(self, gfy_count: Optional[int] = None, cursor: Optional[str] = None,
                                      tag_name: Optional[str] = None):
        """
        Retrieve GIFs in a reaction category, the "trending" category by default.

        Apart from "trending", GIFs of other categories can also be found through ``search``,
        which ranks category members first when the search text is a category name.
        """
        return await self.request(RequestDescriptor(
            api="/reactions",
            endpoint="/populated",
            query={
                "gfyCount": _default(gfy_count, 1),
                "cursor": cursor,
                "tagName": _default(tag_name, "trending"),
            },
        ))

    @with_callback
    async def get_trending(self, count: Optional[int] = None, cursor: Optional[str] = None,
                           tag_name: Optional[str] = None):
        """Retrieve trending GIFs, overall or for ``tag_name``; 100 results by default"""
        return await self.request(RequestDescriptor(
            api="/gfycats",
            endpoint="/trending",
            query={
                "count": _default(count, 100),
                "cursor": cursor,
                "tagName": tag_name,
            },
        ))

    @with_callback
    async def get_trending_tags(self, cursor: Optional[str] = None):
        """Retrieve trending tags"""
        return await self.request(RequestDescriptor(
            api="/tags",
            endpoint="/trending",
            query={"cursor": cursor},
        ))

    @with_callback
    async def get_trending_tags_populated(self, count: Optional[int] = None, cursor: Optional[str] = None,
                                          gfy_count: Optional[int] = None):
        """Retrieve trending tags with their GIFs"""
        return await self.request(RequestDescriptor(
            api="/tags",
            endpoint="/trending/populated",
            query={
                "count": _default(count, 100),
                "cursor": cursor,
                "gfyCount": _default(gfy_count, 1),
            },
        ))

    @with_callback
    async def search(self, search_text: str, count: Optional[int] = None, start: Optional[int] = None,
                     cursor: Optional[str] = None):
        """
        Search all GIFs.

        For pagination, use either ``cursor`` (with ``count``) or ``count`` with ``start``.

        Args:
            search_text (str): Search term or phrase.
            count (int, optional): Number of results, 100 by default.
            start (int, optional): Results offset.
            cursor (str, optional): Cursor from a previous page.
        """
        return await self.request(RequestDescriptor(
            api="/gfycats",
            endpoint="/search",
            query={
                "search_text": _require("search_text", search_text),
                "count": _default(count, 100),
                "start": start,
                "cursor": cursor,
            },
        ))

    @with_callback
    async def search_by_id(self, gfy_id: str):
        """Retrieve a single GIF by its gfyId"""
        return await self.request(RequestDescriptor(
            api="/gfycats",
            endpoint="/" + _require("gfy_id", gfy_id),
        ))

    @with_callback
    async def get_related_content(self, gfy_id: str, cursor: Optional[str] = None, count: Optional[int] = None,
                                  from_: Optional[int] = None):
        """Retrieve GIFs related to a given GIF"""
        return await self.request(RequestDescriptor(
            api="/gfycats",
            endpoint=f"/{_require('gfy_id', gfy_id)}/related",
            query={
                "cursor": cursor,
                "count": count,
                "from": from_,
            },
        ))

    @with_callback
    async def artifacts(self, upload_key: str, tags: Union[str, Sequence[str]]):
        """Associate tags with an upload; a single string is one tag. Sent as a form-encoded POST"""
        return await self.request(RequestDescriptor(
            api="/gifartifacts",
            method="POST",
            headers={"Content-Type": FORM_CONTENT_TYPE},
            payload={
                "uploadKey": _require("upload_key", upload_key),
                "tags": [_require("tags", tags)] if isinstance(tags, str) else list(_require("tags", tags)),
            },
        ))

    @with_callback
    async def stickers(self, search_text: Optional[str] = None, cursor: Optional[str] = None,
                       count: Optional[int] = None):
        """List stickers, or search them when ``search_text`` is given"""
        return await self.request(RequestDescriptor(
            api="/stickers",
            endpoint="/search" if search_text else "",
            query={
                "cursor": cursor,
                "count": count,
                "search_text": search_text,
            },
        ))
