"""Core: domain, contracts, settings and the generation services."""
