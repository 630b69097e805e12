"""Lumen content hub RAG service."""

__version__ = "0.1.0"
