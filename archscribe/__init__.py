"""
archscribe

Detects architectural decisions in code changes and drafts the context for
recording them.

Philosophy:
- Aggregate facts, never analyze code: upstream tools compute the change facts
- Every verdict is explainable: each contributing criterion yields a reason
- Pure classification: no hidden state, same input gives the same output

Usage:
    from archscribe.common import load_config, configure_logging
    from archscribe.common.schemas import ChangeAnalysis, parse_change_analysis
    from archscribe.classifier import ChangeScorer, NarrativeSynthesizer
    from archscribe.classifier import is_likely_architectural, is_architecturally_significant
"""

__version__ = "0.1.0"
