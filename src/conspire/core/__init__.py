"""Core data model: normalized series, layers and chart variants."""
