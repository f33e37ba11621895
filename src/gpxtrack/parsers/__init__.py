"""GPX XML decoder."""
