"""Django project package for the hospital administration dashboard."""
