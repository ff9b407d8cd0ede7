"""Core data models, configuration and exceptions for ehstat."""
