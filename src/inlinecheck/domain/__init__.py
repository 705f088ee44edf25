"""Domain layer: node model, value objects, ports and exceptions."""
