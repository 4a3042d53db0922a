#!/usr/bin/env python3
"""StyleSync - Per-contact style analysis and reply drafting.

Single entry point for the application.

Usage:
    python stylesync.py --status                        # Service readiness (live vs demo)
    python stylesync.py --list                          # Seed contacts and their styles
    python stylesync.py --import chat.txt --name Jessica
    python stylesync.py --import chat.txt --name Jessica --reply "Dinner tonight?"
    python stylesync.py --contact 2 --reply "Can we meet at 3?"
    python stylesync.py --version
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src import __version__
from src.ai.style_learner import summarize_profile
from src.core.config import get_config, validate_config
from src.core.exceptions import ConfigurationError
from src.core.logging import get_logger, setup_logging
from src.db.models import Contact
from src.db.seed import seed_contacts
from src.db.store import ConversationStore
from src.engine.orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="StyleSync - Per-contact style analysis and reply drafting"
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "--status", action="store_true", help="Show service readiness report and exit"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--list", action="store_true", help="Analyze and list seed contacts")
    parser.add_argument(
        "--import", dest="import_file", type=Path, help="Transcript file to import"
    )
    parser.add_argument("--name", help="Contact name for --import")
    parser.add_argument("--contact", help="Seed contact id to work with")
    parser.add_argument("--reply", help="Simulate this incoming message and draft a reply")
    return parser


def _print_contact(contact: Contact) -> None:
    print(f"[{contact.id}] {contact.name} ({len(contact.messages)} messages)")
    if contact.style:
        print(f"    {summarize_profile(contact.style)}")
    if contact.draft_reply:
        print(f"    Draft: {contact.draft_reply}")


async def _run_session(args: argparse.Namespace, orchestrator: Orchestrator) -> int:
    """Drive the workflows for one CLI invocation."""
    logger = get_logger("main")

    try:
        if args.list:
            for contact in orchestrator.contacts():
                orchestrator.select_contact(contact.id)
                await orchestrator.wait_for_background()
            for contact in orchestrator.contacts():
                _print_contact(contact)
            return 0

        if args.import_file:
            try:
                raw_text = args.import_file.read_text(encoding="utf-8")
            except OSError as e:
                logger.error(f"Cannot read transcript: {e}")
                return 1
            contact = orchestrator.import_transcript(args.name or "", raw_text)
            if contact is None:
                print("Import rejected: a contact name and non-empty transcript are required.")
                return 2
        elif args.contact:
            if args.contact not in orchestrator.store:
                print(f"Unknown contact: {args.contact}")
                return 2
            orchestrator.select_contact(args.contact)
        else:
            print("Nothing to do. Use --list, --import or --contact (see --help).")
            return 2

        await orchestrator.wait_for_background()

        if args.reply:
            orchestrator.simulate_incoming(args.reply)
            await orchestrator.accept_confirmation()

        active = orchestrator.active_contact
        if active is not None:
            _print_contact(active)
        return 0
    finally:
        await orchestrator.shutdown()


def main() -> int:
    """Main entry point for StyleSync.

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    args = _build_parser().parse_args()

    if args.version:
        print(f"StyleSync v{__version__}")
        return 0

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    console_level = logging.DEBUG if (args.debug or config.debug) else logging.INFO
    setup_logging(log_dir=config.log_path, console_level=console_level)
    logger = get_logger("main")
    logger.info(f"StyleSync v{__version__} starting...")

    issues = validate_config(config)
    for issue in issues:
        if issue.startswith("CRITICAL:"):
            logger.error(f"Configuration: {issue}")
        else:
            logger.warning(f"Configuration issue: {issue}")

    from src.core.services import get_service_registry

    registry = get_service_registry()
    registry.log_status()

    if args.status:
        report = registry.readiness_report()
        print(f"\nStyleSync v{__version__} - Service Readiness\n")
        print(report.summary)
        if issues:
            print(f"\nConfiguration issues ({len(issues)}):")
            for issue in issues:
                print(f"  ! {issue}")
        print()
        return 0

    if args.import_file and not args.name:
        print("--import requires --name", file=sys.stderr)
        return 2

    orchestrator = Orchestrator(ConversationStore(seed_contacts()), config=config)
    exit_code = asyncio.run(_run_session(args, orchestrator))
    logger.info("StyleSync shutdown complete")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
