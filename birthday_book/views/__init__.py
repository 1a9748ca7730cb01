"""HTML pages for the friends admin screens."""
