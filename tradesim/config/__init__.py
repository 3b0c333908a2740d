"""
Configuration module.

Frozen parameter defaults, YAML-backed loading with layered overrides and
parameter validation.
"""
