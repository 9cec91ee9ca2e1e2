"""Generation services: collect, validate and the pipeline composing them."""
