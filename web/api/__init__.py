"""API views for the rendering layer."""
