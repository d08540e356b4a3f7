"""HTTP request execution and response persistence."""
