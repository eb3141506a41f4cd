"""Domain core: settings, errors, logging and video storage."""
