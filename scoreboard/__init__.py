"""Tournament score ingestion and live ranking service."""
