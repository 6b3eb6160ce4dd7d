"""Infrastructure layer — file I/O for the offline batch driver."""
