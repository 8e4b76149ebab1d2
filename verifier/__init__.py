"""Development environment verifier for PostgreSQL + pgvector."""
