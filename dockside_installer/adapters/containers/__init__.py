"""Container runtime, daemon, and cluster adapters."""
