"""Service layer — operations consumed by the CLI, returning ServiceResult."""
