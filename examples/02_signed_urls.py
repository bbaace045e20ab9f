"""
Single PUT uploads and playback URLs
"""
import asyncio
from ittypy import IttyClient, APIConfig


async def main():
    async with IttyClient(config=APIConfig.from_env()) as itty:

        # Small file, one request
        outcome = await itty.upload("clip.mp4", folder="clips")
        print(outcome)

        # Short-lived playback URL
        signed = await itty.sign_playback("clips/clip.mp4")
        print(f"Play: {signed.url} (expires {signed.expiry})")


if __name__ == "__main__":
    asyncio.run(main())
