"""harscope command-line interface."""
