"""Command-line interface for publishing documents to MarkLogic."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Sequence

from ..channels import PublishingError
from ..content import FileContentReader, MappingContentService
from ..security import DecryptionError, FernetDecryptor, SecretNotFoundError
from ..settings import load_config
from ..utils.logging import configure_logging, get_logger
from .bootstrap import build_channel, resolve_secret_key

LOGGER = get_logger(__name__)

_HANDLED_ERRORS = (
    PublishingError,
    DecryptionError,
    SecretNotFoundError,
    FileNotFoundError,
    ValueError,
)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(structured=not args.log_plain, log_file=args.log_file)

    handler: Callable[[argparse.Namespace], int] | None = getattr(args, "handler", None)
    if handler is None:
        parser.print_help(sys.stderr)
        return 2

    try:
        return handler(args)
    except _HANDLED_ERRORS as exc:
        LOGGER.error(
            "Command failed: %s",
            exc,
            extra={"event": "cli.error", "command": args.command, "error_type": type(exc).__name__},
        )
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mlpublish", description="MarkLogic publishing channel")
    parser.add_argument("--config", help="Path to configuration file", default=None)
    parser.add_argument(
        "--log-plain",
        action="store_true",
        help="Use plain-text logs instead of JSON",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append JSON logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command")

    publish_parser = subparsers.add_parser("publish", help="PUT a document into MarkLogic")
    publish_parser.add_argument("--document-id", required=True, help="Identifier of the document")
    publish_parser.add_argument("--file", required=True, type=Path, help="File holding the content")
    publish_parser.add_argument(
        "--mimetype",
        default=None,
        help="Media type of the content; checked against the channel's supported types",
    )
    publish_parser.set_defaults(handler=_handle_publish)

    unpublish_parser = subparsers.add_parser("unpublish", help="DELETE a document from MarkLogic")
    unpublish_parser.add_argument("--document-id", required=True, help="Identifier of the document")
    unpublish_parser.set_defaults(handler=_handle_unpublish)

    encrypt_parser = subparsers.add_parser(
        "encrypt", help="Encrypt a credential for use in the channel configuration"
    )
    group = encrypt_parser.add_mutually_exclusive_group(required=True)
    group.add_argument("value", nargs="?", help="Plain-text value to encrypt")
    group.add_argument(
        "--generate-key",
        action="store_true",
        help="Print a fresh secret key instead of encrypting",
    )
    encrypt_parser.set_defaults(handler=_handle_encrypt)

    return parser


def _handle_publish(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    reader = FileContentReader(args.file, mimetype=args.mimetype)
    channel = build_channel(config, MappingContentService({args.document_id: reader}))

    LOGGER.info(
        "Publishing document",
        extra={"event": "cli.command", "command": "publish", "document_id": args.document_id},
    )
    channel.publish(args.document_id, config.channel.as_properties())
    return 0


def _handle_unpublish(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    channel = build_channel(config, MappingContentService({}))

    LOGGER.info(
        "Unpublishing document",
        extra={"event": "cli.command", "command": "unpublish", "document_id": args.document_id},
    )
    channel.unpublish(args.document_id, config.channel.as_properties())
    return 0


def _handle_encrypt(args: argparse.Namespace) -> int:
    if args.generate_key:
        print(FernetDecryptor.generate_key())
        return 0
    config = load_config(args.config)
    print(FernetDecryptor(resolve_secret_key(config)).encrypt(args.value))
    return 0


__all__ = ["main"]
