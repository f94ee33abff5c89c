"""Configuration loading (YAML defaults + environment overrides)."""
