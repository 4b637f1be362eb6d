"""Street Gallery: pick a spot on the map and browse the photos taken around it."""
__version__ = "0.1.0"
