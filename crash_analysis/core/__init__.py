"""Core configuration, logging and analysis components."""
