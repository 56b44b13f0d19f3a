"""Output layer — formatting ServiceResult for humans and machines."""
