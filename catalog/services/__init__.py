"""Catalog use cases and the image upload pipeline."""
