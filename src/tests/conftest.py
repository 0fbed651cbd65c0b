"""
Shared test fixtures and utilities.

This module provides:
- Raw dataset entries and the records/store built from them
- Temporary dataset files
- Mock LLM client fixtures
"""

import os
import sys
import json
import pytest
from unittest.mock import Mock

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import DataStore
from records import ChatMessage, record_from_dict


# =============================================================================
# Path Constants
# =============================================================================

SRC_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
ROOT_DIR = os.path.dirname(SRC_DIR)
SAMPLE_DATA_PATH = os.path.join(ROOT_DIR, "data", "evaluations.json")


# =============================================================================
# Fixtures: Dataset
# =============================================================================

def make_entry(**overrides):
    """A valid raw dataset entry; keyword arguments override fields."""
    entry = {
        "id": "1",
        "toolName": "Clueso",
        "category": ["AI Video Editing"],
        "status": "Piloting",
        "evaluator": "Dana Reyes",
        "evaluationDate": "2025-06-12",
        "cost": "$120/mo",
        "overallScore": 4.2,
        "detailedScores": {"easeOfUse": 4.5, "outputQuality": 4.0},
        "keyFindings": "Turns screen recordings into product videos.",
        "recommendation": "Continue pilot.",
        "businessImpact": "Faster tutorials.",
        "pros": ["Fast"],
        "cons": ["Few templates"],
        "useCases": ["Tutorials"],
        "exampleOutput": None,
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def raw_entries():
    """Five entries covering every shape of category and exampleOutput."""
    return [
        make_entry(
            id="1", toolName="Clueso", status="Piloting",
            category=["AI Video Editing", "AI Productivity"],
            evaluationDate="2025-06-12",
            exampleOutput="2025-06-12: Walkthrough https://clueso.example.com/v/1",
        ),
        make_entry(
            id="2", toolName="HeyGen", status="Approved", evaluator="Sam Patel",
            category=["AI Avatars", "AI Video Generation"],
            evaluationDate="2025-05-03",
            keyFindings="Realistic avatars, compared favourably to Clueso voiceover.",
            exampleOutput=["https://heygen.example.com/1", "https://heygen.example.com/2"],
        ),
        make_entry(
            id="3", toolName="BlurMantis", status="Under Review",
            category="AI Video Editing",
            evaluationDate="2025-04-20",
            keyFindings="Automatic blurring.",
            exampleOutput="See BlurMantis app",
        ),
        make_entry(
            id="4", toolName="SoundForge AI", status="Rejected", evaluator="Lee Morgan",
            category=["AI Audio Generation"],
            evaluationDate="2025-03-15",
            keyFindings="Generic music beds.",
            exampleOutput="N/A",
        ),
        make_entry(
            id="5", toolName="CodePilot Review", status="In Progress", evaluator="Sam Patel",
            category=["AI Development Tools"],
            evaluationDate="TBD",
            keyFindings="Verbose review comments.",
            overallScore=None,
        ),
    ]


@pytest.fixture
def records(raw_entries):
    return [record_from_dict(entry) for entry in raw_entries]


@pytest.fixture
def store(raw_entries):
    return DataStore.from_dicts(raw_entries)


@pytest.fixture
def data_file(tmp_path, raw_entries):
    """Dataset written to a temporary JSON file."""
    path = tmp_path / "evaluations.json"
    path.write_text(json.dumps(raw_entries), encoding="utf-8")
    return str(path)


# =============================================================================
# Fixtures: Mock LLM
# =============================================================================

@pytest.fixture
def mock_llm_client():
    """Mock LLMClient whose complete() returns a fixed assistant reply."""
    async def complete(context, history):
        return ChatMessage(role="assistant", content="Mock reply")

    client = Mock()
    client.complete = Mock(side_effect=complete)
    return client


@pytest.fixture
def failing_llm_client():
    """Mock LLMClient whose complete() always raises."""
    async def complete(context, history):
        raise ConnectionError("network down")

    client = Mock()
    client.complete = Mock(side_effect=complete)
    return client
