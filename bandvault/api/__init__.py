"""HTTP surface of the file access backend."""
