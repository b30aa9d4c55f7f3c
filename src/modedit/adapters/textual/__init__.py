"""Textual renderer, key translation and the ``modedit`` entry point."""
