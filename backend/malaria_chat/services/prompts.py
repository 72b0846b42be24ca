"""Malaria knowledge-base system prompt.

The prompt text ships as package data and is read once at import time.
"""
from pathlib import Path

PROMPT_PATH = Path(__file__).parent.parent / "prompts" / "malaria_system.txt"


def load_system_prompt() -> str:
    """Load the system prompt text."""
    if not PROMPT_PATH.exists():
        raise FileNotFoundError(f"System prompt not found: {PROMPT_PATH}")
    return PROMPT_PATH.read_text(encoding="utf-8").strip()


SYSTEM_PROMPT = load_system_prompt()


def system_message() -> dict:
    """The system turn prepended to every upstream conversation."""
    return {"role": "system", "content": SYSTEM_PROMPT}
