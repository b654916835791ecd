"""Console front end of the meaning-pivot pipeline.

Loads ``pivotchat.ini``, builds the service container and prints the processed views as JSON.
Without a sub-command an interactive loop reads one message per line.

Examples:
    python pivotchat.py process "bagunnava" --from telugu --to english
    python pivotchat.py analyze "Bagunnava bro?" --lang telugu
    python pivotchat.py correct "bagunava" --lang telugu
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, NoReturn

from config.loader import Config, ConfigLoader, ConfigLoaderError
from core.pipeline import ServiceContainer
from core.version import VERSION
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from models.message_models import MessageViews, PreviewResult

CFG_FILE: Final[str] = "pivotchat.ini"
EXIT_COMMANDS: Final[frozenset[str]] = frozenset({"/quit", "/exit"})

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv (list[str] | None): Arguments to parse; ``sys.argv[1:]`` when None.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="Meaning-pivot chat translation and transliteration",
        epilog='Example: python pivotchat.py process "bagunnava" --from telugu --to english',
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--config", dest="config", metavar="FILE", default=CFG_FILE, help="Configuration file")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--backend", dest="backend", metavar="NAME", help="Override the translation backend")
    parser.add_argument("--endpoint", dest="endpoint", metavar="URL", help="Override the http backend endpoint")

    subparsers = parser.add_subparsers(dest="command")
    for name, help_text in (("process", "Build both chat views"), ("preview", "Build the sender preview")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("text", help="Message text")
        sub.add_argument("--from", dest="sender", required=True, metavar="LANG", help="Sender language")
        sub.add_argument("--to", dest="receiver", required=True, metavar="LANG", help="Receiver language")

    analyze = subparsers.add_parser("analyze", help="Classify the input method of a text")
    analyze.add_argument("text", help="Input text")
    analyze.add_argument("--lang", dest="language", metavar="LANG", help="Language of the writer")

    correct = subparsers.add_parser("correct", help="Apply phonetic correction to romanized text")
    correct.add_argument("text", help="Romanized text")
    correct.add_argument("--lang", dest="language", metavar="LANG", help="Language of the writer")
    correct.add_argument("--suggest", dest="suggest", type=int, default=0, metavar="N", help="Show N suggestions")

    interactive = subparsers.add_parser("chat", help="Interactive loop (default)")
    interactive.add_argument("--from", dest="sender", default="english", metavar="LANG", help="Sender language")
    interactive.add_argument("--to", dest="receiver", default="english", metavar="LANG", help="Receiver language")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply command-line overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).name
    overrides: dict[str, Any] = {"debug": args.debug, "backend": args.backend, "endpoint": args.endpoint}
    config: Config = ConfigLoader(
        config_filename=FileUtils.resolve_path(args.config), script_name=script_name, **overrides
    ).config
    config.GENERAL.VERSION = VERSION
    return config


def setup_logging(config: Config) -> None:
    log_file: str = str(FileUtils.resolve_path(config.GENERAL.LOG_FILE)) if config.GENERAL.LOG_FILE else ""
    logger_utils = LoggerUtils(log_file)
    logger_utils.set_level("DEBUG" if config.GENERAL.DEBUG else "INFO")
    logger.debug("Logging level: %s", logger_utils.get_level().name)


def print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


async def run_command(container: ServiceContainer, args: argparse.Namespace) -> None:
    """Execute one sub-command against an initialized container."""
    match args.command:
        case "process":
            views: MessageViews = await container.pipeline.process(args.text, args.sender, args.receiver)
            print_json(views.to_dict())
        case "preview":
            preview: PreviewResult = await container.pipeline.preview(args.text, args.sender, args.receiver)
            print_json(preview.to_dict())
        case "analyze":
            analysis = container.normalizer.analyze(args.text, args.language)
            payload: dict[str, Any] = asdict(analysis)
            payload["description"] = analysis.description
            print_json(payload)
        case "correct":
            correction = container.corrector.correct_text(args.text, args.language)
            result: dict[str, Any] = asdict(correction)
            if args.suggest > 0:
                result["suggestions"] = {
                    word: [asdict(s) for s in container.corrector.get_suggestions(word, args.language, args.suggest)]
                    for word in args.text.split()
                }
            print_json(result)
        case _:
            await interactive_loop(container, args.sender, args.receiver)


async def interactive_loop(container: ServiceContainer, sender: str, receiver: str) -> None:
    """Read messages from stdin until EOF or an exit command.

    ``/from LANG`` and ``/to LANG`` switch the languages of the conversation.
    """
    print(f"pivotchat {VERSION} ({sender} -> {receiver}); type /quit to exit")
    while True:
        try:
            line: str = await asyncio.to_thread(input, "> ")
        except EOFError:
            break

        command, _, value = line.strip().partition(" ")
        if command in EXIT_COMMANDS:
            break
        if command in {"/from", "/to"}:
            if container.registry.get(value) is None:
                print(f"Unknown language: {value}", file=sys.stderr)
                continue
            if command == "/from":
                sender = value
            else:
                receiver = value
            print(f"({sender} -> {receiver})")
            continue

        views: MessageViews = await container.pipeline.process(line, sender, receiver)
        print(f"  you : {views.sender.main}")
        print(f"  them: {views.receiver.main}")
        if views.sender.english:
            print(f"  en  : {views.sender.english}")


async def main(argv: list[str] | None = None) -> int:
    args: argparse.Namespace = parse_arguments(argv)
    if args.command is None:
        args.sender, args.receiver = "english", "english"

    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        return 1

    setup_logging(config)
    logger.debug("Configuration loaded: %s", config)

    async with ServiceContainer(config) as container:
        await run_command(container, args)
    return 0


def cli() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
    except (OSError, RuntimeError, ValueError) as err:
        print(f"\nFatal error: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli()
