"""File access: word list readers, settings and exports."""
