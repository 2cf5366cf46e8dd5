"""Sheet-level parsing: reading, cell classification, header/month/block detection."""
