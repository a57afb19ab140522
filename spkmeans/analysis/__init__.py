"""Result analysis."""

from .terms import top_terms, format_partition_report

__all__ = [
    'top_terms',
    'format_partition_report'
]
