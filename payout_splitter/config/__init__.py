"""Run configuration loading (YAML + JSON schema)."""
