"""Prompt templates for JSON generation."""

from typing import Optional

JSON_GENERATION_SYSTEM_PROMPT = """You are a JSON generator assistant specialized in creating JSON files for iPhone apps.
Generate valid, well-formatted JSON based on the user's description.
ONLY output the raw JSON, no markdown code blocks, no explanations.
Ensure the JSON is:
- Valid and parseable
- Well-structured for iOS/iPhone app use cases
- Using appropriate data types
- Including helpful example data when relevant"""


def get_json_generation_system_prompt(extra_instructions: Optional[str] = None) -> str:
    """Get system prompt for JSON generation.

    Args:
        extra_instructions: Optional caller guidance appended to the base prompt

    Returns:
        str: System prompt for JSON generation
    """
    if extra_instructions:
        return f"{JSON_GENERATION_SYSTEM_PROMPT}\n\nAdditional instructions:\n{extra_instructions.strip()}"
    return JSON_GENERATION_SYSTEM_PROMPT
