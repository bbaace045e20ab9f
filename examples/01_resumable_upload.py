"""
Upload large files in 16 MiB chunks
"""
import asyncio
from ittypy import IttyClient, APIConfig, UploadComplete


async def main():
    # Reads ITTYBIT_API_KEY from the environment
    async with IttyClient(config=APIConfig.from_env()) as itty:

        # Upload with progress
        def on_progress(percent):
            print(f"Progress: {percent}%")

        outcome = await itty.upload_resumable(
            "movie.mp4",
            folder="videos",
            progress_callback=on_progress
        )
        if isinstance(outcome, UploadComplete):
            print(f"Uploaded: {outcome.url} ({outcome.chunks} chunks)")
        else:
            print(f"Failed: {outcome.reason}")

        # Cancel between chunks
        cancel = asyncio.Event()
        upload = asyncio.create_task(itty.upload_resumable("huge.mov", cancel_event=cancel))
        await asyncio.sleep(5)
        cancel.set()
        print(await upload)


if __name__ == "__main__":
    asyncio.run(main())
