"""Law Hierarchy Studio: selection and content aggregation over hierarchical legal texts."""
