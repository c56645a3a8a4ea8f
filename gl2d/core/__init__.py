"""Math kernel and transform stack."""
