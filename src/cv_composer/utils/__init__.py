"""Utility functions and helpers"""

from cv_composer.utils.json_fields import dump_list, load_indices, load_text_list

__all__ = ["dump_list", "load_indices", "load_text_list"]
