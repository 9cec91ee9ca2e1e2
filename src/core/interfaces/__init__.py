"""Core contracts (Protocol) implemented by concrete adapters."""
