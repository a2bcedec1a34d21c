"""Configuration, path management and root resolution for dbloader."""
