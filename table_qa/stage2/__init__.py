"""
Stage 2: QA Synthesizer

Phrases per-column totals, averages and counts as question/answer text.
"""

from .synthesizer import QASynthesizer, QuestionAnswer

__all__ = ['QASynthesizer', 'QuestionAnswer']
