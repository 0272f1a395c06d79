"""Infrastructure: persistence, image storage, security adapters."""
