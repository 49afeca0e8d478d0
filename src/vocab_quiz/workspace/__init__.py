"""``vocab init`` workspace bootstrap command."""
