"""CodeQnA forum backend."""
