"""Domain layer: value objects, aggregation rules, exceptions and ports."""
