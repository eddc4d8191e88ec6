"""HTTP backend serving the temperature heat map."""
