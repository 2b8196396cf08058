"""Django project package for the mailing list manager."""
