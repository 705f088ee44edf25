"""Infrastructure layer: tree traversal and analyzers."""
