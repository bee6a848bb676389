"""
CLI argument parser module.

The connection settings are generated from the configuration schema;
each API area gets its own subcommand.
"""

from argparse import ArgumentParser

from ..config.loader import ConfigLoader


def create_argument_parser() -> ArgumentParser:
    """Create and configure the argument parser."""
    parser = ConfigLoader.generate_cli_parser()
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    chat = subparsers.add_parser("chat", help="Send a message to an assistant")
    chat.add_argument("message", help="Message text")
    chat.add_argument(
        "--stream",
        action="store_true",
        help="Print the answer as it is streamed",
    )
    chat.add_argument(
        "--system",
        default="",
        help="System prompt sent with the message",
    )
    chat.add_argument(
        "--image",
        action="append",
        default=[],
        metavar="URL",
        help="Image URL attached to the message (repeatable)",
    )

    subparsers.add_parser("assistants", help="List available assistants")
    subparsers.add_parser("models", help="List available models")

    threads = subparsers.add_parser("threads", help="List, show or delete conversation threads")
    threads.add_argument("--page", type=int, default=0, help="Page number")
    threads.add_argument("--items-per-page", type=int, default=0, help="Threads per page")
    action = threads.add_mutually_exclusive_group()
    action.add_argument("--show", metavar="THREAD_ID", help="Show a single thread")
    action.add_argument("--delete", metavar="THREAD_ID", help="Delete a thread")

    transcribe = subparsers.add_parser("transcribe", help="Transcribe an audio file")
    transcribe.add_argument("file", help="Audio file (.mp3, .wav or .m4a)")
    transcribe.add_argument("--language", help="Spoken language hint, e.g. fr")
    transcribe.add_argument("--format", dest="output_format", help="Transcription output format")

    return parser
