"""Storage adapters for Pomotask CLI."""
