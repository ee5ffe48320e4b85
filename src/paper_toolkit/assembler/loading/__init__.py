"""
Module: assembler.loading

Purpose:
    Question bank loading from JSON / JSONL files and the bundled sample.
"""

from .loader import load_question_bank, load_sample_bank, parse_question_bank, LoaderError

__all__ = [
    "load_question_bank",
    "load_sample_bank",
    "parse_question_bank",
    "LoaderError",
]
