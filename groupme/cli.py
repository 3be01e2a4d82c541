import argparse
import logging
import sys
from typing import List, Optional, Sequence

from pydantic import TypeAdapter

from .api import GroupMeAPI, GroupsAPI, GroupsIndexOptions, MessagesAPI, MessagesIndexOptions
from .config import load_access_token
from .errors import GroupMeError
from .types import Group, Message

logger = logging.getLogger(__name__)

_groups_adapter = TypeAdapter(List[Group])
_messages_adapter = TypeAdapter(List[Message])

def _print_json(adapter: TypeAdapter, value, compact: bool) -> None:
    print(adapter.dump_json(value, indent=None if compact else 2, exclude_none=True).decode())

def run_groups(api: GroupMeAPI, args: argparse.Namespace) -> None:
    options = GroupsIndexOptions(offset=args.offset, limit=args.limit, omit=args.omit)
    groups = GroupsAPI(api).index(options)
    logger.info(f"Fetched {len(groups)} groups")
    _print_json(_groups_adapter, groups, args.compact)

def run_messages(api: GroupMeAPI, args: argparse.Namespace) -> None:
    options = MessagesIndexOptions(before_id=args.before, since_id=args.since, after_id=args.after, limit=args.limit)
    messages = MessagesAPI(api).index(args.group_id, options)
    logger.info(f"Fetched {len(messages)} messages from group {args.group_id}")
    _print_json(_messages_adapter, messages, args.compact)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="groupme", description="Query the GroupMe API and print the results as JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests to stderr")
    commands = parser.add_subparsers(dest="command", metavar="command", required=True)

    groups = commands.add_parser("groups", help="query groups that the authenticated user belongs to")
    groups.add_argument("--offset", type=int, default=0, help="the page offset to start at")
    groups.add_argument("--limit", type=int, default=0, help="limit the number of groups returned")
    groups.add_argument("--omit", nargs="+", default=[], metavar="FIELD", help="fields to omit from each group, e.g. memberships")
    groups.add_argument("--compact", action="store_true", help="output compact JSON")
    groups.set_defaults(run=run_groups, action="indexing groups")

    messages = commands.add_parser("messages", help="query messages from a particular group")
    messages.add_argument("group_id", help="group ID to list messages for")
    messages.add_argument("--before", default="", metavar="ID", help="returns messages created before the given message ID")
    messages.add_argument("--since", default="", metavar="ID", help="returns most recent messages created after the given message ID")
    messages.add_argument("--after", default="", metavar="ID", help="returns messages created immediately after the given message ID")
    messages.add_argument("--limit", type=int, default=0, help="limit the number of messages returned, the maximum is 100")
    messages.add_argument("--compact", action="store_true", help="output compact JSON")
    messages.set_defaults(run=run_messages, action="indexing messages")

    return parser

def main(argv: Optional[Sequence[str]] = None, api: GroupMeAPI = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    owned = api is None
    try:
        if owned:
            api = GroupMeAPI(load_access_token())
        args.run(api, args)
    except GroupMeError as e:
        print(f"Error {args.action}: {e}", file=sys.stderr)
        return 1
    finally:
        if owned and api is not None:
            api.close()
    return 0

def run() -> None:
    sys.exit(main())
