"""Command-line interface for w2d."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .conversion import ArticleParser
from .deepl import DeepLClient, SupportedLanguage
from .errors import W2DError
from .logging_config import setup_logging
from .models.config import AUTH_KEY_ENV_VAR, W2DConfig
from .source import STDIN_MARKER, open_article


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="w2d",
        description="Converts a wikipedia article to markdown and translates it using the DeepL.com api.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Convert an article to markdown
  w2d markdown https://en.wikipedia.org/wiki/Hearth

  # Convert a saved page
  w2d markdown - < hearth.html

  # Translate an article into German
  w2d translate DE https://en.wikipedia.org/wiki/Hearth -k "$DEEPL_KEY"

  # List the languages DeepL can translate into
  w2d list-languages -t target

The DeepL key can also be given in the {AUTH_KEY_ENV_VAR} environment variable.
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only report errors",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    markdown = subparsers.add_parser("markdown", help="converts wikipedia article html to markdown")
    markdown.add_argument(
        "article",
        nargs="?",
        default=STDIN_MARKER,
        help="full url to the article or '-' for STDIN (default: -)",
    )

    translate = subparsers.add_parser("translate", help="translates a wikipedia article")
    translate.add_argument("target_lang", help="target language for translation")
    translate.add_argument("article", help="full url to the article or '-' for STDIN")
    translate.add_argument(
        "--source-lang",
        "-s",
        default="",
        help="source language, leave empty for autodetect",
    )
    _add_auth_key_argument(translate)

    list_languages = subparsers.add_parser("list-languages", help="retrieve a list of supported languages")
    list_languages.add_argument(
        "--type",
        "-t",
        choices=["source", "target"],
        default="source",
        help="which type of languages to return (default: source)",
    )
    _add_auth_key_argument(list_languages)

    return parser


def _add_auth_key_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--auth-key",
        "-k",
        default=None,
        help=f"DeepL API auth key (default: ${AUTH_KEY_ENV_VAR})",
    )


def load_config(path: Optional[Path]) -> W2DConfig:
    """Load the config file if one was given, otherwise the defaults."""
    if path is None:
        return W2DConfig()
    return W2DConfig.from_yaml_file(path)


def create_client(args: argparse.Namespace, config: W2DConfig) -> DeepLClient:
    """Build a DeepL client from the command line and config."""
    auth_key = config.deepl.resolve_auth_key(args.auth_key)
    if not auth_key:
        raise W2DError(f"a DeepL auth key is required (use --auth-key or set {AUTH_KEY_ENV_VAR})")
    return DeepLClient(auth_key, endpoint=config.deepl.endpoint, timeout=config.network.timeout)


def convert_article(article: str, config: W2DConfig) -> str:
    """Fetch an article and convert it to markdown."""
    parser = ArticleParser(config.parser)
    return parser.parse(open_article(article, config.network))


def run_markdown(args: argparse.Namespace, config: W2DConfig) -> str:
    return convert_article(args.article, config)


def run_translate(args: argparse.Namespace, config: W2DConfig) -> str:
    client = create_client(args, config)
    markdown = convert_article(args.article, config)
    return client.translate_to_string(markdown, args.target_lang, args.source_lang)


def format_languages(languages: dict[str, SupportedLanguage]) -> str:
    """Render languages as one "CODE - Name (formality_support: bool)" line each, sorted by code."""
    lines = []
    for code in sorted(languages):
        language = languages[code]
        formality = "true" if language.supports_formality else "false"
        lines.append(f"{code} - {language.name} (formality_support: {formality})\n")
    return "".join(lines)


def run_list_languages(args: argparse.Namespace, config: W2DConfig) -> str:
    client = create_client(args, config)
    return format_languages(client.supported_languages(target=args.type == "target"))


COMMANDS = {
    "markdown": run_markdown,
    "translate": run_translate,
    "list-languages": run_list_languages,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    out = Console()
    err = Console(stderr=True)

    try:
        config = load_config(args.config)
    except W2DError as e:
        err.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    level = config.log_level
    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "ERROR"
    setup_logging(level, log_file=str(config.log_file) if config.log_file else None)

    try:
        result = COMMANDS[args.command](args, config)
    except W2DError as e:
        err.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1

    out.out(result, end="", highlight=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
