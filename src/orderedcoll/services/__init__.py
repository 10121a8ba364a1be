"""Service layer — result-returning facades over the collection operations."""
