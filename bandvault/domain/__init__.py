"""Domain layer: file access policy and object-store contracts."""
