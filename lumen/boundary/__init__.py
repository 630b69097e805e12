"""Boundary adapters: database, vector store, content source."""
