"""Command line inspector for GitHub entities."""
