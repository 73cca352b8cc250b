"""Domain layer: canonical records, normalization, the keyed store and import flow."""
