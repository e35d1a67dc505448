"""Optimizer configuration: YAML loading and the typed settings schema."""
