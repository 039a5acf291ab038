"""Configuration, errors, logging and value types shared by every component."""
