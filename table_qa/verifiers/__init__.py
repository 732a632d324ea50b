"""
Verification checkpoints for table-qa.

QA Check: structure, consistency and recomputation of generated pairs (after Stage 2)
"""

from .qa_check import QAChecker

__all__ = ['QAChecker']
