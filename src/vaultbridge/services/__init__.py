"""Service layer — batch-level entry points returning ServiceResult."""
