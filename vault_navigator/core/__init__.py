"""Core operations: content access, indexing, ranking, traversal and note edits."""
