"""Infrastructure layer: persistence, storage providers, and event wiring."""
