"""Core domain logic: content processing pipeline, agent tools, exceptions."""
