"""Application layer: counter store, resolver, instrumenters, services, reporters."""
