"""Strip structural noise from file content while keeping a line map.

Block comments (and Python docstring-style triple-quoted strings) are blanked
out without changing the line count, then blank lines are dropped. The
resulting ``line_map`` translates cleaned line numbers back to the original
file.
"""

import re
from typing import Optional, Sequence

from src.services.reviewer.schemas import CleanedFile

BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)

TRIPLE_QUOTED = (
    re.compile(r'""".*?"""', re.DOTALL),
    re.compile(r"'''.*?'''", re.DOTALL),
)

TRIPLE_QUOTE_EXTENSIONS = (".py",)


def _blank_out(pattern: re.Pattern, text: str) -> str:
    """Replace each match with only the newlines it contained."""
    return pattern.sub(lambda match: "\n" * match.group(0).count("\n"), text)


def clean_code(content: str, path: str) -> CleanedFile:
    """Remove block comments and blank lines from ``content``.

    Args:
        content: Raw file content
        path: File path, used to pick language-specific patterns

    Returns:
        CleanedFile with the kept lines and their original 1-based positions
    """
    intermediate = _blank_out(BLOCK_COMMENT, content)
    if path.lower().endswith(TRIPLE_QUOTE_EXTENSIONS):
        for pattern in TRIPLE_QUOTED:
            intermediate = _blank_out(pattern, intermediate)

    kept_lines = []
    line_map = []
    for number, line in enumerate(intermediate.split("\n"), start=1):
        text = line.rstrip()
        if text.strip():
            kept_lines.append(text)
            line_map.append(number)

    return CleanedFile(cleaned_content="\n".join(kept_lines), line_map=tuple(line_map))


def remap_line(line_map: Sequence[int], line: Optional[int]) -> Optional[int]:
    """Translate a 1-based cleaned line number to the original file."""
    if line is None or line < 1 or line > len(line_map):
        return None
    return line_map[line - 1]
