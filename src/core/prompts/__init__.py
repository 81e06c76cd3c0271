"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

PROMPTS_DIR = Path(__file__).parent
_env = Environment(loader=FileSystemLoader(PROMPTS_DIR), keep_trailing_newline=True)

SYSTEM_PROMPT = "You are a Software Tech Lead performing a pull request review."


def render_code_review_prompt(
    file_name: str,
    content: str,
    guidelines: str | None = None,
) -> str:
    """Render the per-file review prompt.

    Custom guidelines, when given, replace the default review rules.
    """
    template = _env.get_template("code_review.jinja2")
    return template.render(
        file_name=file_name,
        content=content,
        guidelines=guidelines,
    )
