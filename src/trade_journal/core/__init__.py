"""Core utilities: exceptions and date handling."""
