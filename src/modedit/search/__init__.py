"""Filename matching for the open-file popup."""

from .fuzzy import collect_files, fuzzy_match, fuzzy_score, to_relative_label

__all__ = ["collect_files", "fuzzy_match", "fuzzy_score", "to_relative_label"]
