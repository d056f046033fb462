"""External storage integrations."""
