"""Internal implementation modules for text formatting."""
