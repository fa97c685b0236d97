"""Graph store, shared data types, constants and logging."""
