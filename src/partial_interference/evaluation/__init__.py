"""Analytical truth and evaluation metrics."""

from .truth import regime_truth, truth_table
from .metrics import MetricsCalculator, summarize_results, print_summary

__all__ = ['regime_truth', 'truth_table', 'MetricsCalculator', 'summarize_results', 'print_summary']
