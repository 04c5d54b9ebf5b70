"""Core building blocks: payload model, classification and uploads."""
