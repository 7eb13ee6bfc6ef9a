"""Catalog API: products, categories, banners and their images."""
