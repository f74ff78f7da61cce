"""HTTP serving for Law Hierarchy Studio."""
