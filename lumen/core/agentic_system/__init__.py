"""Agentic system: LLM-facing tools and agents."""
