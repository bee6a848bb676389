"""
CLI main application module.

Entry point of the ``aiyou`` command: parses arguments, loads the
configuration, runs one subcommand and maps failures to exit codes.
"""

import json
import logging
import sys
from argparse import Namespace
from typing import List, Optional

from ..api import Client, Context
from ..config import ConfigError, ConfigLoader, ConfigSchema
from ..constants import (
    EXIT_API_FAILURES,
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    EXIT_UNEXPECTED_ERROR,
)
from ..errors import AiyouError, ValidationError
from ..models import AudioTranscriptionRequest, ChatCompletionRequest, UserThreadsParams
from ..utils import MessageBuilder, setup_logging
from .parser import create_argument_parser

logger = logging.getLogger(__name__)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def run_chat(client: Client, config: ConfigSchema, args: Namespace, ctx: Context) -> None:
    if not config.assistant_id:
        raise ValidationError("assistant ID is required (set AIYOU_ASSISTANT_ID or use --assistant-id)")

    builder = MessageBuilder("user").add_text(args.message)
    for url in args.image:
        builder.add_image(url)

    request = ChatCompletionRequest(
        messages=[builder.build()],
        assistant_id=config.assistant_id,
        prompt_system=args.system,
    )

    if args.stream:
        with client.chat_completion_stream(request, ctx=ctx) as reader:
            for chunk in reader:
                print(chunk.text, end="", flush=True)
        print()
    else:
        response = client.chat_completion(request, ctx=ctx)
        print(response.text)


def run_assistants(client: Client, args: Namespace, ctx: Context) -> None:
    assistants = client.get_user_assistants(ctx=ctx)
    for assistant in assistants.members:
        print(f"{assistant.id}\t{assistant.name}")
    logger.info(f"{assistants.total_items} assistants in total")


def run_models(client: Client, args: Namespace, ctx: Context) -> None:
    models = client.get_models(ctx=ctx)
    for model in models.models:
        print(f"{model.id}\t{model.name}")


def run_threads(client: Client, args: Namespace, ctx: Context) -> None:
    if args.delete:
        client.delete_thread(args.delete, ctx=ctx)
        print(f"Deleted thread {args.delete}")
        return

    if args.show:
        thread = client.get_conversation(args.show, ctx=ctx)
        _print_json(thread.to_payload())
        return

    params = UserThreadsParams(page=args.page, items_per_page=args.items_per_page)
    output = client.get_user_threads(params, ctx=ctx)
    for thread in output.threads:
        print(f"{thread.id}\t{thread.assistant_name}\t{thread.first_message}")
    logger.info(f"Page {output.current_page}, {output.total_items} threads in total")


def run_transcribe(client: Client, args: Namespace, ctx: Context) -> None:
    options = None
    if args.language or args.output_format:
        options = AudioTranscriptionRequest(language=args.language, format=args.output_format)
    result = client.transcribe_audio_file(args.file, options, ctx=ctx)
    print(result.transcription or result.text)


def main(argv: Optional[List[str]] = None):
    """Main entry point for the script."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = ConfigLoader.load(schema=ConfigSchema, cli_args=args)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_CONFIG_ERROR)

    ctx = Context.background()
    try:
        with Client.from_config(config) as client:
            if args.command == "chat":
                run_chat(client, config, args, ctx)
            elif args.command == "assistants":
                run_assistants(client, args, ctx)
            elif args.command == "models":
                run_models(client, args, ctx)
            elif args.command == "threads":
                run_threads(client, args, ctx)
            elif args.command == "transcribe":
                run_transcribe(client, args, ctx)
    except KeyboardInterrupt:
        ctx.cancel("interrupted by user")
        logger.warning("Interrupted by user (Ctrl+C)")
        sys.exit(EXIT_INTERRUPTED)
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(EXIT_INPUT_ERROR)
    except AiyouError as e:
        logger.error(f"Request failed: {e}")
        sys.exit(EXIT_API_FAILURES)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        sys.exit(EXIT_UNEXPECTED_ERROR)

    return EXIT_SUCCESS
