"""memsearch -- embedding backends for agent memory search."""
