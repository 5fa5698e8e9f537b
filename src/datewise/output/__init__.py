"""Output layer — render ServiceResult as Rich text, quiet lines or JSON."""
