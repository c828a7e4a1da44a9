"""
CLI entry point. Starts one refresh worker per language and serves the feeds.
Logic lives in src/, this just wires it together.

Usage:
    GITHUB_LANGUAGES=go,rust python run_server.py
"""
import logging
import sys

import uvicorn

from src.config import ConfigError, load_config
from src.feed.store import FeedStore
from src.ingestion.github_client import GitHubClient
from src.ingestion.markdown_renderer import MarkdownRenderer
from src.serving.feed_server import create_app
from src.worker.refresh_worker import RefreshWorker

logger = logging.getLogger("run_server")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        config = load_config()
    except ConfigError as e:
        logger.critical(f"config: {e}")
        sys.exit(1)
    logging.getLogger().setLevel(config.log_level)

    if not config.github_token:
        logger.warning("GITHUB_TOKEN not set, using unauthenticated API access (low rate limit)")

    client = GitHubClient(token=config.github_token, timeout=config.github_timeout)
    store = FeedStore(config.languages)
    renderer = MarkdownRenderer()

    for language in store.languages():
        RefreshWorker(
            language,
            store,
            client,
            renderer=renderer,
            min_stars=config.stars,
            interval=config.refresh_interval,
        ).start()

    logger.info(f"serving {', '.join(store.languages())} on port {config.port}")
    uvicorn.run(create_app(store), host="0.0.0.0", port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
