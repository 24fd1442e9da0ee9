"""Issuebot entry point.

Runs once per GitHub Actions job: reads the event name and payload path
from the runner environment (GITHUB_EVENT_NAME, GITHUB_EVENT_PATH),
dispatches the event to the command actors and exits. Usage: issuebot
[--config config.yaml] [--check].
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from issuebot.actors import ActorOptions
from issuebot.adapters.github import GitHubAdapter
from issuebot.config import AppConfig, ConfigError, load_config
from issuebot.dispatcher import ActorFailedError, Dispatcher, DispatchError
from issuebot.logging import IssueBotLogging
from issuebot.notify.dingtalk import DingTalkClient
from issuebot.registry import ActorRegistry, default_registry


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="issuebot",
        description="Issuebot - run slash commands from a GitHub issue comment event",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parser.add_argument(
        "--event-name",
        default=None,
        help="Webhook event name (default: $GITHUB_EVENT_NAME)",
    )
    parser.add_argument(
        "--event-path",
        default=None,
        help="Path to the webhook payload JSON (default: $GITHUB_EVENT_PATH)",
    )
    return parser.parse_args(argv)


def build_dispatcher(
    config: AppConfig,
    registry: ActorRegistry | None = None,
    log: logging.Logger | None = None,
) -> Dispatcher:
    """Wire adapter, chat notifier and registry from config."""
    logger = log or logging.getLogger("issuebot")
    adapter = GitHubAdapter(
        token=config.require_github_token(),
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )
    notifier = DingTalkClient(
        token=config.dingtalk_token_resolved,
        endpoint=config.dingtalk.endpoint,
        timeout=config.dingtalk.timeout,
        log=logging.getLogger("issuebot.notify.dingtalk"),
    )
    options = ActorOptions(notifier=notifier, bot=config.bot, html_url=config.github.html_url)
    return Dispatcher(registry or default_registry(), adapter, options, log=logger)


def main(argv: list[str] | None = None) -> int:
    """Entry point: dispatch the current event; 0 on success, 1 on any
    failure."""
    args = parse_args(argv)
    log = IssueBotLogging().setup()
    try:
        config = load_config(args.config)
    except ConfigError as e:
        log.error("failed to load config by err: %s", e)
        return 1
    log = IssueBotLogging(config.logging).setup()

    if args.check:
        print("Config OK:", config.github.api_url, "token" if config.github_token_resolved else "no token")
        return 0

    event_name = args.event_name or os.environ.get("GITHUB_EVENT_NAME", "")
    event_path = args.event_path or os.environ.get("GITHUB_EVENT_PATH", "")

    try:
        dispatcher = build_dispatcher(config, log=log)
    except ConfigError as e:
        log.error("failed to init GitHub client by err: %s", e)
        return 1

    try:
        dispatcher.dispatch_file(event_name, event_path)
    except DispatchError as e:
        log.error("failed to dispatch event by err: %s", e)
        return 1
    except ActorFailedError as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
