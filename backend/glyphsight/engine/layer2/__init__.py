"""Layer 2: closed curve tracing."""
