"""Infrastructure adapters: YAML file, Jinja2 rendering, file output, nginx exec."""
