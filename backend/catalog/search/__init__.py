"""Search & filtering query engine."""
