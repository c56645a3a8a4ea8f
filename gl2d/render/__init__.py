"""CPU-side packing of kernel values for GPU upload."""
