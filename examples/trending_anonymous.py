import asyncio
from GfycatSDK import GfycatClient, configure_structlog

configure_structlog("INFO")

# No options: anonymous mode against the test API
api_client = GfycatClient()


async def list_trending():
    async with api_client:
        response = await api_client.get_trending(count=10)
        for gfy in response.get("gfycats", []):
            print(f"{gfy['gfyName']}: {gfy.get('title', 'No title')}")

if __name__ == "__main__":
    asyncio.run(list_trending())
