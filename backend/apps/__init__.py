"""Feature modules, one package per route group."""
