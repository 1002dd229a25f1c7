"""Configuration, logging and constants shared across the catalog."""
