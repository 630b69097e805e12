"""Application services: orchestration between the API and the core."""
