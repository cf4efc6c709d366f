"""Canned responses served when the upstream model is not used.

``UNCONFIGURED`` texts answer requests while no API key is set.  ``FALLBACK``
texts replace a failed upstream call under the ``fallback`` failure policy.
Both are static data.
"""

from __future__ import annotations

from typing import Dict

from .models import Operation

UNCONFIGURED: Dict[Operation, str] = {
    Operation.EXECUTE: (
        "Mock code execution response (no API key)\n\n"
        "Output:\n"
        "Hello, World!"
    ),
    Operation.FIX: (
        "Mock code fix response (no API key)\n\n"
        "I analyzed your code and found some improvements to make:\n\n"
        "1. Added proper docstrings\n"
        "2. Fixed PEP 8 style issues\n"
        "3. Improved error handling\n\n"
        "```python\n"
        "# Improved code\n"
        "def calculate_sum(numbers):\n"
        '    """Calculate the sum of a list of numbers.\n'
        "\n"
        "    Args:\n"
        "        numbers (list): A list of numeric values\n"
        "\n"
        "    Returns:\n"
        "        float: The sum of all numbers\n"
        "\n"
        "    Raises:\n"
        "        TypeError: If input is not a list or contains non-numeric values\n"
        '    """\n'
        "    if not isinstance(numbers, list):\n"
        '        raise TypeError("Input must be a list")\n'
        "\n"
        "    try:\n"
        "        return sum(numbers)\n"
        "    except TypeError:\n"
        '        raise TypeError("All elements must be numeric")\n'
        "```"
    ),
}

FALLBACK: Dict[Operation, str] = {
    Operation.EXECUTE: (
        "Mock execution response (AI service unavailable)\n\n"
        "Output:\n"
        "Hello, World!"
    ),
    Operation.FIX: (
        "Mock fix response (AI service unavailable)\n\n"
        "I analyzed your code and found a few issues:\n\n"
        "1. You have a syntax error on line 3\n"
        '2. The variable "result" is undefined before use\n'
        "3. You should add proper error handling\n\n"
        "Here's the fixed code:\n\n"
        "```\n"
        "# Fixed version\n"
        "def calculate_average(numbers):\n"
        "    if not numbers:\n"
        "        return 0\n"
        "\n"
        "    total = sum(numbers)\n"
        "    result = total / len(numbers)\n"
        "    return result\n"
        "```"
    ),
}
