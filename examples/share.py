"""
Share text and images with Clipboarder
"""
import asyncio
import os

from clipboarder import ActionKind, ClipboarderClient, ShareRequest, TransportConfig


async def main():
    config = TransportConfig(base_url=os.environ.get("CLIPBOARDER_URL", "http://localhost:8080"))

    async with ClipboarderClient(access_token=os.environ["CLIPBOARDER_TOKEN"], config=config) as client:

        # Selected text
        result = await client.share_text("hello from my laptop")
        print(result.message)

        # Several texts at once
        result = await client.share_text("first", "second")
        print(result.message)

        # Image file
        result = await client.share_image("screenshot.png")
        print(result.message)

        # Raw share event, as a share sheet would deliver it
        request = ShareRequest(ActionKind.SEND, "text/plain", texts=["shared link"])
        print(f"Classified as: {client.classify(request).kind.value}")
        result = await client.share(request)
        print(f"{result.message} (ok={result.ok})")

        # Follow attempt states
        client.coordinator.on("state", lambda attempt, state: print(f"#{attempt.attempt_id}: {state.value}"))
        await client.share_text("watched upload")


if __name__ == "__main__":
    asyncio.run(main())
