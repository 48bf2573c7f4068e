"""Frontend page serving."""
