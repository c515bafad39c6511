"""Infrastructure adapters: object store, transformers, scanners and detection."""
