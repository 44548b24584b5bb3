"""Domain layer: contract model, body normalization, matching, and reporting."""
