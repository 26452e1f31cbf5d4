"""CLI adapter – parses arguments, dispatches to use cases, formats output."""

from __future__ import annotations

import argparse
import json
import sys
import textwrap

from exa_cli.adapters.command_spec import COMMAND_SPEC
from exa_cli.adapters import presenters
from exa_cli.domain.commands import (
    AnswerCommand,
    ApiCommand,
    BodyOverride,
    ContentsCommand,
    ContextCommand,
    FindSimilarCommand,
    ResearchStartCommand,
    SearchCommand,
)


# ---------------------------------------------------------------------------
# Help text
# ---------------------------------------------------------------------------
HELP_TEXT = textwrap.dedent("""\
    Exa CLI – call the Exa search & research API from the shell.

    Usage:
      exa <command> [options]

    Commands:
      help [cmd]        Show help (or help for a specific command)
      spec              Output machine-readable command spec (JSON)
      search            POST /search
      contents          POST /contents
      find-similar      POST /findSimilar
      answer            POST /answer
      context           POST /context
      research start    Submit a research task, prints its id
      research check    Check a research task by id
      mcp tools         List hosted MCP tools
      mcp url           Print the hosted MCP URL

    Examples:
      exa search --query "rust async runtimes" --pretty
      exa search --query "llm evals" --body '{"numResults": 3}'
      exa contents --urls https://example.com,https://exa.ai
      exa answer --query "who maintains httpx?"
      exa research start --instructions "Summarize recent work on RLHF"
      exa research check --task-id <id>
      exa mcp url --tools web_search_exa,crawling_exa

    Every API command accepts:
      --body JSON         raw JSON object merged over the flags (wins on conflicts)
      --body-file PATH    same, read from a file (--body wins if both are given)
      --pretty            pretty-print the JSON response
      --api-key KEY       override EXA_API_KEY
      --api-base URL      override EXA_API_BASE
      --timeout SECONDS   network timeout (default 30)
      --verbose           debug logging on stderr
    --pretty and the --api-*/--timeout/--verbose flags may also come
    before the command, e.g. exa --pretty search --query x

    For detailed help:  exa help <command>
""")

_BODY_HELP = (
    "  --body       Raw JSON object merged over the flags\n"
    "  --body-file  Path to a JSON file (ignored if --body is given)\n"
    "  --pretty     Pretty-print the response"
)

COMMAND_HELP: dict[str, str] = {
    "help": "Usage: exa help [<command>]\n\nShow general help or help for a specific command.",
    "spec": "Usage: exa spec\n\nOutputs the full machine-readable command spec as JSON.\nUseful for agent onboarding.",
    "search": (
        'Usage: exa search --query "<text>" [--body JSON | --body-file PATH] [--pretty]\n\n'
        "Search the web via POST /search.\n"
        "  --query      Search query (may instead come from --body)\n" + _BODY_HELP
    ),
    "contents": (
        "Usage: exa contents --urls a,b [--ids x,y] [--body JSON | --body-file PATH] [--pretty]\n\n"
        "Fetch contents via POST /contents. At least one of urls/ids is required.\n"
        "  --urls       Comma-separated URLs\n"
        "  --ids        Comma-separated result ids\n" + _BODY_HELP
    ),
    "find-similar": (
        "Usage: exa find-similar --url <url> [--body JSON | --body-file PATH] [--pretty]\n\n"
        "Find similar pages via POST /findSimilar.\n"
        "  --url        Source URL\n" + _BODY_HELP
    ),
    "answer": (
        'Usage: exa answer --query "<question>" [--body JSON | --body-file PATH] [--pretty]\n\n'
        "Get an answer with citations via POST /answer (stream is always false).\n"
        "  --query      Question\n" + _BODY_HELP
    ),
    "context": (
        'Usage: exa context --query "<text>" [--body JSON | --body-file PATH] [--pretty]\n\n'
        "Code and documentation context via POST /context.\n"
        "  --query      Query\n" + _BODY_HELP
    ),
    "research": (
        'Usage: exa research start --instructions "<text>" [--body JSON | --body-file PATH] [--pretty]\n'
        "       exa research check --task-id <id> [--pretty]\n\n"
        "start submits a task and prints the response (with its id).\n"
        "check queries the task once; re-run it until the status is\n"
        "completed, failed or canceled."
    ),
    "mcp": (
        "Usage: exa mcp tools [--pretty]\n"
        "       exa mcp url [--tools all|a,b] [--pretty]\n\n"
        "Offline helpers for the hosted Exa MCP server.\n"
        "  --tools   'all' or a comma-separated list of tool names"
    ),
}


# ---------------------------------------------------------------------------
# Build container (lazy import to avoid circular deps)
# ---------------------------------------------------------------------------
def _build_transport():
    from exa_cli.infrastructure.http_transport import HttpxTransport

    return HttpxTransport()


def _build_container(args: argparse.Namespace) -> dict:
    """Resolve config, credentials and collaborators for one API call.

    Raises ``MissingCredential`` before anything touches the network.
    """
    from exa_cli.infrastructure.config import load_config, resolve_credentials, resolve_timeout
    from exa_cli.infrastructure.logger import ConsoleLogger
    from exa_cli.application.use_cases.dispatch_request import DispatchRequest

    config = load_config()
    logger = ConsoleLogger(verbose=getattr(args, "verbose", False))
    credentials = resolve_credentials(
        config,
        api_key=getattr(args, "api_key", None),
        api_base=getattr(args, "api_base", None),
    )
    timeout = resolve_timeout(config, getattr(args, "timeout", None))
    dispatcher = DispatchRequest(
        transport=_build_transport(),
        credentials=credentials,
        logger=logger,
        timeout=timeout,
    )
    return {
        "config": config,
        "logger": logger,
        "credentials": credentials,
        "dispatcher": dispatcher,
    }


def _body(args: argparse.Namespace) -> BodyOverride:
    return BodyOverride(inline=args.body, file=args.body_file)


def _split_list(values: list[str] | None) -> tuple[str, ...]:
    if not values:
        return ()
    return tuple(part for v in values for part in v.split(","))


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------
def cmd_help(args: argparse.Namespace) -> None:
    if args.topic:
        text = COMMAND_HELP.get(args.topic)
        if text:
            print(text)
        else:
            print(f"Unknown command: {args.topic}")
            print(HELP_TEXT)
    else:
        print(HELP_TEXT)


def cmd_spec(_args: argparse.Namespace) -> None:
    print(json.dumps(COMMAND_SPEC, indent=2))


def _run_api(args: argparse.Namespace, command: ApiCommand) -> None:
    c = _build_container(args)
    resp = c["dispatcher"].execute(command)
    presenters.present_response(resp.response, pretty=args.pretty)


def cmd_search(args: argparse.Namespace) -> None:
    _run_api(args, SearchCommand(query=args.query, body=_body(args)))


def cmd_contents(args: argparse.Namespace) -> None:
    command = ContentsCommand(
        urls=_split_list(args.urls),
        ids=_split_list(args.ids),
        body=_body(args),
    )
    _run_api(args, command)


def cmd_find_similar(args: argparse.Namespace) -> None:
    _run_api(args, FindSimilarCommand(url=args.url, body=_body(args)))


def cmd_answer(args: argparse.Namespace) -> None:
    _run_api(args, AnswerCommand(query=args.query, body=_body(args)))


def cmd_context(args: argparse.Namespace) -> None:
    _run_api(args, ContextCommand(query=args.query, body=_body(args)))


def cmd_research_start(args: argparse.Namespace) -> None:
    c = _build_container(args)
    from exa_cli.application.use_cases.research_job import StartResearch

    uc = StartResearch(dispatcher=c["dispatcher"], logger=c["logger"])
    resp = uc.execute(ResearchStartCommand(instructions=args.instructions, body=_body(args)))
    presenters.present_response(resp.response, pretty=args.pretty)


def cmd_research_check(args: argparse.Namespace) -> None:
    c = _build_container(args)
    from exa_cli.application.use_cases.research_job import CheckResearch

    uc = CheckResearch(dispatcher=c["dispatcher"], logger=c["logger"])
    resp = uc.execute(args.task_id)
    presenters.present_response(resp.response, pretty=args.pretty)


def cmd_mcp_tools(args: argparse.Namespace) -> None:
    from exa_cli.application.use_cases.mcp_config import tool_manifest

    presenters.present_tools(tool_manifest(), pretty=args.pretty)


def cmd_mcp_url(args: argparse.Namespace) -> None:
    from exa_cli.application.use_cases.mcp_config import build_url

    presenters.present_url(build_url(args.tools))


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------
GLOBAL_DEFAULTS: dict[str, object] = {
    "pretty": False,
    "api_key": None,
    "api_base": None,
    "timeout": None,
    "verbose": False,
}


class _Parser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit 1 like every other failure."""

    def error(self, message: str):  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _common_parent() -> argparse.ArgumentParser:
    # SUPPRESS so a flag given before the subcommand is not reset by the subparser
    p = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    p.add_argument("--pretty", action="store_true")
    p.add_argument("--api-key", type=str)
    p.add_argument("--api-base", type=str)
    p.add_argument("--timeout", type=float, metavar="SECONDS")
    p.add_argument("--verbose", "-v", action="store_true")
    return p


def _body_parent() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument("--body", type=str, default=None)
    p.add_argument("--body-file", type=str, default=None, metavar="PATH")
    return p


def build_parser() -> argparse.ArgumentParser:
    common = _common_parent()
    body = _body_parent()
    api_parents = [common, body]

    parser = _Parser(
        prog="exa",
        description="Exa CLI",
        add_help=False,
        parents=[common],
    )
    sub = parser.add_subparsers(dest="command")

    # help
    p_help = sub.add_parser("help", add_help=False)
    p_help.add_argument("topic", nargs="?", default=None)
    p_help.set_defaults(func=cmd_help)

    # spec
    p_spec = sub.add_parser("spec", add_help=False)
    p_spec.set_defaults(func=cmd_spec)

    # search
    p_search = sub.add_parser("search", add_help=False, parents=api_parents)
    p_search.add_argument("--query", type=str, default=None)
    p_search.set_defaults(func=cmd_search)

    # contents
    p_contents = sub.add_parser("contents", add_help=False, parents=api_parents)
    p_contents.add_argument("--urls", nargs="+", action="extend", default=None)
    p_contents.add_argument("--ids", nargs="+", action="extend", default=None)
    p_contents.set_defaults(func=cmd_contents)

    # find-similar
    p_similar = sub.add_parser("find-similar", add_help=False, parents=api_parents)
    p_similar.add_argument("--url", type=str, default=None)
    p_similar.set_defaults(func=cmd_find_similar)

    # answer
    p_answer = sub.add_parser("answer", add_help=False, parents=api_parents)
    p_answer.add_argument("--query", type=str, default=None)
    p_answer.set_defaults(func=cmd_answer)

    # context
    p_context = sub.add_parser("context", add_help=False, parents=api_parents)
    p_context.add_argument("--query", type=str, default=None)
    p_context.set_defaults(func=cmd_context)

    # research start | check
    p_research = sub.add_parser("research", add_help=False, parents=[common])
    research_sub = p_research.add_subparsers(dest="research_command", required=True)
    p_start = research_sub.add_parser("start", add_help=False, parents=api_parents)
    p_start.add_argument("--instructions", type=str, default=None)
    p_start.set_defaults(func=cmd_research_start)
    p_check = research_sub.add_parser("check", add_help=False, parents=[common])
    p_check.add_argument("--task-id", type=str, default=None)
    p_check.set_defaults(func=cmd_research_check)

    # mcp tools | url (network flags accepted but unused)
    p_mcp = sub.add_parser("mcp", add_help=False, parents=[common])
    mcp_sub = p_mcp.add_subparsers(dest="mcp_command", required=True)
    p_tools = mcp_sub.add_parser("tools", add_help=False, parents=[common])
    p_tools.set_defaults(func=cmd_mcp_tools)
    p_url = mcp_sub.add_parser("url", add_help=False, parents=[common])
    p_url.add_argument("--tools", type=str, default=None, metavar="LIST|all")
    p_url.set_defaults(func=cmd_mcp_url)

    return parser


def run_cli(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to the appropriate command handler."""
    parser = build_parser()
    args = parser.parse_args(argv)
    for key, value in GLOBAL_DEFAULTS.items():
        if not hasattr(args, key):
            setattr(args, key, value)

    if not args.command:
        print(HELP_TEXT)
        return

    if hasattr(args, "func"):
        try:
            args.func(args)
        except Exception as exc:
            presenters.present_error(exc)
            sys.exit(1)
    else:
        print(HELP_TEXT)
