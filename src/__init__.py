"""
Tool evaluation tracker: search, stats and an assistant over evaluation records.

Key design principles:
1. Records are immutable and loaded once into a DataStore
2. Filtering, stats and example-output parsing are pure functions
3. The chat session is the only stateful component, with single-flight sends
4. Explicit dependencies: config, store and client are passed in, never global

Modules:
- records.py: EvaluationRecord, Status, ChatMessage
- database.py: DataStore
- example_output.py: parse_example_output, ExampleLink
- filtering.py: Query, filter_records, aggregate, Stats
- presentation.py: status/score/category display attributes
- prompts.py: dataset context and system prompt
- llm.py: LLMClient, ConversationManager
- dashboard.py: Dashboard controller
- config.py: Immutable AppConfig, PathConfig, LLMConfig
- main.py: CLI and programmatic entry points
"""

from records import EvaluationRecord, Status, ChatMessage
from config import AppConfig, load_config
from database import DataStore
from example_output import ExampleLink, parse_example_output
from filtering import Query, Stats, filter_records, aggregate
from llm import LLMClient, ConversationManager
from dashboard import Dashboard
from main import open_dashboard

__all__ = [
    # Records
    "EvaluationRecord",
    "Status",
    "ChatMessage",
    # Config
    "AppConfig",
    "load_config",
    # Data
    "DataStore",
    # Parsing
    "ExampleLink",
    "parse_example_output",
    # Filtering
    "Query",
    "Stats",
    "filter_records",
    "aggregate",
    # LLM
    "LLMClient",
    "ConversationManager",
    # Dashboard
    "Dashboard",
    "open_dashboard",
]
