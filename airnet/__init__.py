"""airnet: air-route network analytics."""
