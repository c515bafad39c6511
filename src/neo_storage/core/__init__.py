"""Core domain layer for neo-storage: exceptions, value objects, entities and protocols."""
