"""Copying external text files into the search directory."""
