"""Configuration, logging, persistence and token handling."""
