"""Command-line entrypoint for one-off Chatter requests."""

from __future__ import annotations

import argparse
import os
from typing import Any, Callable

from commands.run import main as run_action
from commands.run import text_message
from salesforce.config import load_api_config
from salesforce.endpoints import actions, chatter
from salesforce.errors import ConfigurationError
from salesforce.model import Action

# command -> (action, positional argument names, help)
_SIMPLE_COMMANDS: dict[str, tuple[Action, tuple[str, ...], str]] = {
    "groups": (chatter.get_groups, ("name",), "Search groups by name"),
    "users": (chatter.get_users, ("name",), "Search users by name"),
    "mentions": (chatter.get_mention_completions, ("query",), "Mention completions"),
    "topics": (chatter.get_topic_completions, ("query",), "Topic completions"),
    "hashtags": (chatter.get_hashtags, ("tag",), "Feed items matching a hashtag"),
    "more-comments": (chatter.get_more_comments, ("url",), "Fetch a further page of comments"),
    "post-likes": (chatter.get_post_likes, ("id",), "List likes on a post"),
    "comment-likes": (chatter.get_comment_likes, ("id",), "List likes on a comment"),
    "like-post": (chatter.like_post, ("id",), "Like a post"),
    "like-comment": (chatter.like_comment, ("id",), "Like a comment"),
    "unlike": (chatter.unlike, ("url",), "Delete a like by its URL"),
    "delete-post": (chatter.delete_post, ("id",), "Delete a post"),
    "actions": (actions.get_actions, (), "List global quick actions"),
    "describe-action": (actions.get_describe_action, ("url",), "Describe a quick action"),
}


def _format_config() -> str:
    cfg = load_api_config()
    return (
        f"api_prefix={cfg.api_prefix} timeout={cfg.timeout_seconds}s "
        f"feed_sort={cfg.feed_sort} feed_page_size={cfg.feed_page_size}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Salesforce Chatter request runner")
    parser.add_argument(
        "--log-level",
        help="Override LOG_LEVEL for this invocation (e.g. DEBUG, INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    feed_parser = subparsers.add_parser("feed", help="Fetch the news feed")
    feed_parser.add_argument("--url", help="Feed page URL (e.g. nextPageUrl) instead of the default feed")

    for name, (_, positionals, help_text) in _SIMPLE_COMMANDS.items():
        sub = subparsers.add_parser(name, help=help_text)
        for positional in positionals:
            sub.add_argument(positional)

    batch_parser = subparsers.add_parser("batch", help="Fetch several feed items by id")
    batch_parser.add_argument("ids", nargs="+")

    comment_parser = subparsers.add_parser("comment", help="Comment on a post")
    comment_parser.add_argument("post_id")
    comment_parser.add_argument("text")

    post_parser = subparsers.add_parser("post", help="Post to the news feed or a record feed")
    post_parser.add_argument("text")
    post_parser.add_argument("--record", help="Record id whose feed receives the post")

    bookmark_parser = subparsers.add_parser("bookmark", help="Bookmark a feed item")
    bookmark_parser.add_argument("id")
    bookmark_parser.add_argument("--off", action="store_true", help="Remove the bookmark instead")

    subparsers.add_parser("show-config", help="Show the resolved API configuration")
    return parser


def resolve_command(args: argparse.Namespace) -> tuple[Action, list[Any]]:
    """Map parsed arguments onto an endpoint helper and its arguments after the connection."""

    command = args.command
    if command in _SIMPLE_COMMANDS:
        action, positionals, _ = _SIMPLE_COMMANDS[command]
        return action, [getattr(args, name) for name in positionals]
    if command == "feed":
        return chatter.get_feed, [args.url]
    if command == "batch":
        return chatter.get_batch, [list(args.ids)]
    if command == "comment":
        return chatter.submit_comment, [args.post_id, text_message(args.text)]
    if command == "post":
        if args.record:
            return chatter.submit_post_to_record, [args.record, text_message(args.text)]
        return chatter.submit_post, [text_message(args.text)]
    if command == "bookmark":
        return chatter.bookmark_item, [args.id, not args.off]
    raise ValueError(f"Unknown command '{command}'")


def main(argv: list[str] | None = None, *, runner: Callable[..., int] = run_action) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level

    if args.command == "show-config":
        try:
            print(_format_config())
        except ConfigurationError as exc:
            parser.error(str(exc))
        return 0

    action, extra_args = resolve_command(args)
    return runner(action, extra_args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
