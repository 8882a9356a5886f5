"""Entry points into EMPORIUM (currently only the command-line interface)."""
