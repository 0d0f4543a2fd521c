"""Back-office modules built on the ceramics kernel and engines."""
