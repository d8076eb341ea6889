"""Rule engine and concrete validation rules."""
