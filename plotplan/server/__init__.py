"""HTTP interface for building plans."""
