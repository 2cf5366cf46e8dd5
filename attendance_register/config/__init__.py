"""Configuration loading (config/import.yml)."""
