"""
Import media from a public URL
"""
import asyncio
from ittypy import IttyClient, APIConfig, PollConfig, TaskCompleted, TaskTimedOut


async def main():
    # Poll a little longer than the default 5 seconds
    config = APIConfig.from_env(poll=PollConfig(max_attempts=40, total_budget=30.0))

    async with IttyClient(config=config) as itty:
        outcome = await itty.ingest_url("https://example.com/sample.mp4", folder="imports")

        if isinstance(outcome, TaskCompleted):
            print(f"Imported: {outcome.file.id} -> {outcome.file.url}")
        elif isinstance(outcome, TaskTimedOut):
            print(f"{outcome.reason} Task: {outcome.task.id}")
            status = await itty.get_task_status(outcome.task.id)
            print(f"Done: {status.done}")
        else:
            print(outcome.reason)


if __name__ == "__main__":
    asyncio.run(main())
