"""
Main entry point for the tool evaluation tracker.

Wires together config, data store, LLM client, chat session and dashboard.

Usage:
    # Command line
    python main.py stats
    python main.py list --search clueso --category "AI Avatars" --status Approved
    python main.py ask "What are the pros and cons of Clueso?"

    # Programmatic
    from main import open_dashboard
    session = open_dashboard()
    session.dashboard.filtered()
"""

import argparse
import asyncio
import os
import sys
from dataclasses import dataclass

from config import AppConfig, load_config
from dashboard import Dashboard
from database import DataStore
from filtering import Stats
from llm import ConversationManager, LLMClient
from logging_utils import get_logger, set_verbose
from records import EvaluationRecord

logger = get_logger(__name__)


@dataclass
class Session:
    """Everything one user session needs. Discarded when the session ends."""
    config: AppConfig
    store: DataStore
    dashboard: Dashboard
    conversation: ConversationManager


def open_dashboard(config: AppConfig | None = None) -> Session:
    """
    Load the dataset and create a fresh session.

    Args:
        config: Application configuration (loads default if None).

    Returns:
        Session with an empty chat history and cleared filters.
    """
    if config is None:
        config = load_config()

    store = DataStore.load(config.paths.data_path)

    if not config.llm.model:
        logger.warning("No LLM model configured; assistant requests will fail")

    log_path = os.path.join(config.paths.log_dir, "llm_logs.jsonl") if config.llm_log_enabled else None
    client = LLMClient(config.llm, log_path=log_path)

    return Session(
        config=config,
        store=store,
        dashboard=Dashboard(store, default_categories=config.default_categories),
        conversation=ConversationManager(client, store),
    )


def format_stats(stats: Stats) -> str:
    return "\n".join([
        f"Total evaluations: {stats.total}",
        f"Approved:          {stats.approved}",
        f"Piloting:          {stats.piloting}",
        f"In progress:       {stats.in_progress}",
        f"Under review:      {stats.under_review}",
        f"Rejected:          {stats.rejected}",
        f"Approval rate:     {stats.approval_rate}%",
    ])


def format_record_line(record: EvaluationRecord) -> str:
    score = f"{record.overall_score:.1f}" if record.overall_score is not None else "-"
    evaluated = record.evaluation_date.isoformat() if record.evaluation_date else "unknown"
    categories = ", ".join(record.category)
    return f"{evaluated}  {record.status.value:<13} {score:>4}  {record.tool_name} [{categories}]"


def main():
    """Command-line interface."""
    parser = argparse.ArgumentParser(
        description="Browse and query software tool evaluations",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to config JSON file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("stats", help="Show summary counts")

    list_parser = subparsers.add_parser("list", help="List evaluations, newest first")
    list_parser.add_argument("--search", type=str, default="", help="Match tool name, findings or evaluator")
    list_parser.add_argument("--category", action="append", default=[], help="Category filter (repeatable)")
    list_parser.add_argument("--status", type=str, default="", help="Status filter, or 'All'")

    ask_parser = subparsers.add_parser("ask", help="Ask the assistant about the evaluations")
    ask_parser.add_argument("question", type=str)

    args = parser.parse_args()
    set_verbose(args.verbose)

    config = load_config(args.config)

    try:
        session = open_dashboard(config)
    except (OSError, ValueError) as e:
        print(f"Error: could not open dataset: {e}")
        sys.exit(1)

    if args.command == "stats":
        print(format_stats(session.dashboard.stats()))

    elif args.command == "list":
        dashboard = session.dashboard
        dashboard.search_term = args.search
        for category in args.category:
            dashboard.toggle_category(category)
        dashboard.status_filter = args.status
        records = dashboard.filtered()
        for record in records:
            print(format_record_line(record))
        print(f"\n{len(records)} of {len(session.store)} evaluations")

    elif args.command == "ask":
        conversation = session.conversation
        try:
            asyncio.run(conversation.send(args.question))
        except KeyboardInterrupt:
            print("\nInterrupted by user")
            sys.exit(130)
        if conversation.history:
            print(conversation.history[-1].content)


if __name__ == "__main__":
    main()
