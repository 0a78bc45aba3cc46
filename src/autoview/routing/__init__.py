"""Routing — link-derived routes looked up by field names."""
