"""
Prompt construction for the upstream chat-completion call.

A request is turned into a pair of messages: a system instruction that
depends on the operation (and, for ``fix``, on the language) and the user's
snippet passed through verbatim.  Construction is deterministic so that the
same request always produces the same prompt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .models import Operation

EXECUTE_TEMPLATE = (
    "You are an expert {language} programmer and code execution environment. "
    "Execute the code step by step and provide the detailed output. "
    "If there are errors, explain what they are and show error output as it "
    "would appear in a console. "
    "Format any code in your response as fenced code blocks."
)

FIX_TEMPLATE = "You are an expert {language} programmer. Analyze and improve the given code."

PYTHON_FOCUS = """ Focus on:
1. Adding proper docstrings and type hints
2. Fixing any PEP 8 style violations
3. Improving error handling with try/except
4. Adding input validation
5. Optimizing algorithm efficiency
6. Using Pythonic idioms and best practices"""

JAVASCRIPT_FOCUS = """ Focus on:
1. Using modern ES6+ syntax (const/let, arrow functions, destructuring)
2. Improving error handling
3. Keeping the code DRY by removing duplication
4. Improving performance
5. Improving type safety"""

FIX_OUTPUT_INSTRUCTION = (
    " Return the improved code in a fenced code block, followed by an "
    "explanation of the changes you made."
)

FIX_FOCUS: Dict[str, str] = {
    "python": PYTHON_FOCUS,
    "py": PYTHON_FOCUS,
    "javascript": JAVASCRIPT_FOCUS,
    "js": JAVASCRIPT_FOCUS,
    "typescript": JAVASCRIPT_FOCUS,
    "ts": JAVASCRIPT_FOCUS,
}


@dataclass(frozen=True)
class UpstreamPrompt:
    """System instruction and user content sent to the backend."""

    system_instruction: str
    user_content: str

    def to_messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system_instruction},
            {"role": "user", "content": self.user_content},
        ]


def execute_instruction(language: str) -> str:
    return EXECUTE_TEMPLATE.format(language=language)


def fix_instruction(language: str) -> str:
    # Unknown languages get the base template only.
    focus = FIX_FOCUS.get(language.strip().lower(), "")
    return FIX_TEMPLATE.format(language=language) + focus + FIX_OUTPUT_INSTRUCTION


def build_prompt(operation: Operation, text: str, language: str) -> UpstreamPrompt:
    """Build the upstream prompt for ``operation`` on ``text``."""
    if operation is Operation.EXECUTE:
        system = execute_instruction(language)
    elif operation is Operation.FIX:
        system = fix_instruction(language)
    else:
        raise ValueError(f"Unsupported operation: {operation}")
    return UpstreamPrompt(system_instruction=system, user_content=text)
