"""
Prompt templates and dataset context for the evaluation assistant.
"""

import json
from typing import Any, Iterable

from records import EvaluationRecord

# Fields sent to the model for each record, in output order
CONTEXT_FIELDS = (
    "toolName",
    "category",
    "status",
    "evaluator",
    "overallScore",
    "cost",
    "keyFindings",
    "recommendation",
    "pros",
    "cons",
    "useCases",
    "businessImpact",
    "exampleOutput",
)

SYSTEM_PROMPT_TEMPLATE = """You are an AI assistant helping users understand software tool evaluations.

Here are the current tool evaluations in our system:
{context}

Please answer questions about these tool evaluations, providing insights, comparisons, recommendations, and analysis. You can:
- Summarize findings for specific tools
- Compare tools across categories
- Explain scoring rationale
- Provide recommendations based on use cases
- Analyze business impact and costs
- Help users understand evaluation criteria

Be helpful, concise, and reference specific data from the evaluations when relevant. Use bullet points for lists instead of dashes for better readability."""


def project_record(record: EvaluationRecord) -> dict[str, Any]:
    """Reduced, JSON-ready view of a record (keys from CONTEXT_FIELDS)."""
    example_output = record.example_output
    if isinstance(example_output, tuple):
        example_output = list(example_output)

    return {
        "toolName": record.tool_name,
        "category": list(record.category),
        "status": record.status.value,
        "evaluator": record.evaluator,
        "overallScore": record.overall_score,
        "cost": record.cost,
        "keyFindings": record.key_findings,
        "recommendation": record.recommendation,
        "pros": list(record.pros),
        "cons": list(record.cons),
        "useCases": list(record.use_cases) if record.use_cases is not None else None,
        "businessImpact": record.business_impact,
        "exampleOutput": example_output,
    }


def build_evaluation_context(records: Iterable[EvaluationRecord]) -> str:
    """Serialize every record's reduced projection as an indented JSON array."""
    return json.dumps([project_record(r) for r in records], indent=2, ensure_ascii=False)


def system_prompt(context: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(context=context)
