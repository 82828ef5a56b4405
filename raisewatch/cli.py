import asyncio
import argparse
import logging
import sys

from pydantic import ValidationError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


async def _check(channel: str, api_key: str) -> int:
    from raisewatch.config.settings import settings
    from raisewatch.core.errors import RaiseWatchError
    from raisewatch.core.values import ApiKeyCredential, ChannelId
    from raisewatch.youtube.api_client import YouTubeDataClient
    from raisewatch.youtube.live_page import resolve_live_video_id
    from raisewatch.youtube.page_fetcher import PageFetcher

    cid = ChannelId(channel)
    async with YouTubeDataClient(ApiKeyCredential(api_key), timeout=settings.http_timeout_sec) as api, \
            PageFetcher(timeout=settings.http_timeout_sec) as pages:
        try:
            ch = await api.fetch_channel_statistics(cid)
            print(f"Channel {cid}: {ch.title} subscribers={ch.subscriber_count}")
            vid = await resolve_live_video_id(cid, pages)
            video = await api.fetch_video_statistics(vid)
            print(f"Live {vid}: {video.title} likes={video.like_count}")
        except RaiseWatchError as e:
            print(f"Check failed: {e}")
            return 1
    return 0


def main():
    parser = argparse.ArgumentParser(description="Report rising likes and subscribers of a YouTube live channel")
    parser.add_argument("command", nargs="?", default="run", choices=["run", "check"], help="watch the channel or run a single check")
    parser.add_argument("--channel", help="channel id or @handle (default: CHANNEL_ID)")
    parser.add_argument("--interval-ms", type=int, help="polling interval in milliseconds, at least 10000 (default: POLL_INTERVAL_MS)")
    parser.add_argument("--api-key", help="YouTube Data API key (default: API_KEY)")
    parser.add_argument("--metrics", help="comma separated: likes,subscribers (default: WATCH_METRICS)")
    args = parser.parse_args()

    try:
        # settings are read from the environment on first import
        from raisewatch.config.settings import parse_metrics, settings
        from raisewatch.orchestration.service import main as service_main
        metrics = parse_metrics(args.metrics) if args.metrics else None
        if args.command == "check":
            channel = args.channel or settings.channel_id
            api_key = args.api_key or settings.youtube_api_key
            if not channel or not api_key:
                print("Missing channel id or API key")
                sys.exit(2)
            sys.exit(asyncio.run(_check(channel, api_key)))
        # Long-running watch until interrupted
        sys.exit(asyncio.run(service_main(args.channel, args.interval_ms, args.api_key, metrics)))
    except (ValueError, ValidationError) as e:
        print(f"Configuration error: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        print("Stopped.")
        sys.exit(0)
if __name__ == "__main__":
    main()
