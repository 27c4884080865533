"""Domain layer - entities, errors and the collection store service."""
