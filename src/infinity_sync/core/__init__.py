"""Core sync logic, independent of the CLI."""
