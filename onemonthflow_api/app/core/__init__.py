"""Configuration, logging, storage and result primitives shared by every service."""
