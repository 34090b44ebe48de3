"""Prompt text for the specialized agents."""
