"""GPX XML encoder."""
