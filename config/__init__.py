"""Dict-style configuration modules."""
