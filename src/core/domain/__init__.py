"""Domain models and errors.

- Pure, strict data structures (Pydantic v2) describing proxy mappings.
- The domain knows nothing about YAML, Jinja2, the CLI or nginx processes.
"""
