"""SparksAI dashboard layout service."""
