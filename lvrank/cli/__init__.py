"""CLI commands for lvrank."""
