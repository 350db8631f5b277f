"""Prompt loading and rendering utilities."""

from services.shoe_extraction.prompts.loader import get_prompt_path, load_prompt, prompt_version

__all__ = ["load_prompt", "get_prompt_path", "prompt_version"]
