"""Project-level helpers: configuration and the config-driven scanner."""
