"""Receipt field extraction and purchase categorization."""
