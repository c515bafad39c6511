"""Application layer for neo-storage: upload pipeline, commands, queries and services."""
