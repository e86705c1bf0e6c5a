"""Loading flow definitions from YAML."""
