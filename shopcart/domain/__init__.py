"""Cart domain: entities, line-item operations and pricing rules."""
