"""Core engine, configuration, diagnostics and result structures."""
