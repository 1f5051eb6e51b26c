"""Task management web service."""
