import os
import asyncio
from GfycatSDK import GfycatClient, configure_structlog

# Load credentials from environment variables
GFYCAT_CLIENT_ID = os.getenv('GFYCAT_CLIENT_ID')
GFYCAT_CLIENT_SECRET = os.getenv('GFYCAT_CLIENT_SECRET')

if not GFYCAT_CLIENT_ID or not GFYCAT_CLIENT_SECRET:
    raise ValueError("Environment variables GFYCAT_CLIENT_ID and GFYCAT_CLIENT_SECRET must be set")

configure_structlog("DEBUG")
api_client = GfycatClient({"client_id": GFYCAT_CLIENT_ID, "client_secret": GFYCAT_CLIENT_SECRET}, verbose=True)


def print_results(err, res):
    if err:
        print(f"Search failed: {err}")
    else:
        print(f"Found {res.get('found', 0)} GIFs")


async def search(term):
    async with api_client:
        await api_client.authenticate()
        # Callback style: the returned task can still be awaited
        await api_client.search(term, count=5, callback=print_results)
        # Awaitable style
        related = await api_client.get_related_content("adorableexcellentgoose", count=3)
        print(related)

if __name__ == "__main__":
    asyncio.run(search("cats"))
