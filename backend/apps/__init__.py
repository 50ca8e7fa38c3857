"""Domain modules: one package per route group."""
