"""Weather Temperature API backend."""
