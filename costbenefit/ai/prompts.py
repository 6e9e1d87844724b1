"""Prompts for the free-text AI project assessment."""

from __future__ import annotations

import json
from typing import Any

SYSTEM_PROMPT = """\
You are an expert software project analyst. Provide concise, focused \
assessments and avoid superfluous detail. Use EXACTLY the requested Markdown \
format.\
"""

ANALYSIS_PROMPT = """\
Analyse this data and give a concise assessment of the software project. \
Do not repeat the project data, which I already know; give an overall \
assessment based on it.
The answer must use this Markdown structure:

## Strengths
- point 1
- point 2
- point 3

## Critical issues
- point 1
- point 2
- point 3

## Suggestions
- point 1
- point 2
- point 3

## Overall assessment
1-2 sentences of overall assessment

Note: keep the answer concise, at most 3 points per section.\
"""


def build_user_prompt(snapshot: dict[str, Any]) -> str:
    """Combine the analysis instructions with the project data snapshot."""
    return f"{ANALYSIS_PROMPT}\n\nProject data:\n{json.dumps(snapshot, default=str)}"


def build_messages(snapshot: dict[str, Any]) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(snapshot)},
    ]
