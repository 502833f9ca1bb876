"""Entity records, validation rules and the error taxonomy."""
