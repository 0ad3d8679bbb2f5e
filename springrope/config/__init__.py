"""Runtime configuration for the spring rope."""
