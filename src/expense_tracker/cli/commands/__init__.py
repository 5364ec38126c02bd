"""CLI command groups, each exposing ``register_commands(cli)``."""
