"""Infrastructure layer: configuration, logging, database and store wiring."""
