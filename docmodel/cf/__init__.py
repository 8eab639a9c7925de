"""Core facilities: storage backends used by the model layer."""
