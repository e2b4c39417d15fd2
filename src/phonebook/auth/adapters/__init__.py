"""Token adapters."""
