"""Domain services: GitHub aggregation and README generation."""
