"""HTTP server for the search pipeline."""
