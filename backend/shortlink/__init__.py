"""Self-hosted link and file shortener."""
