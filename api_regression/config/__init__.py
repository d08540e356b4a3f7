"""Runtime settings and endpoint config loading."""
