"""Infrastructure adapters for lofty_chat."""
