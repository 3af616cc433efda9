"""Document and index operations other than search."""
