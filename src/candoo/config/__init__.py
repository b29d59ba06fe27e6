"""Configuration: settings models, candoo.toml discovery, logging setup."""
