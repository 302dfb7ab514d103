"""Core types and exceptions shared by the catalog and the pipeline."""
