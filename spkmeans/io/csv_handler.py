"""CSV output for clustering reports."""

import csv
from typing import List, Dict, Union, Any
from pathlib import Path


def write_partition_summary_csv(
    partition_summary: List[Dict[str, Any]],
    filepath: Union[str, Path],
    delimiter: str = ','
) -> None:
    """
    Write per-partition summary to CSV.
    
    Args:
        partition_summary: Records with partition, size, quality, cohesion
            and top_terms keys
        filepath: Path to output CSV file
        delimiter: CSV delimiter
    """
    if not partition_summary:
        Path(filepath).touch()
        return
    
    fieldnames = [
        'partition',
        'size',
        'quality',
        'cohesion',
        'top_terms'
    ]
    
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter=delimiter)
        writer.writeheader()
        
        for record in partition_summary:
            terms = record.get('top_terms', [])
            
            row = {
                'partition': record.get('partition', ''),
                'size': record.get('size', 0),
                'quality': f"{record.get('quality', 0):.4f}",
                'cohesion': f"{record.get('cohesion', 0):.4f}",
                'top_terms': '; '.join(str(t) for t in terms)
            }
            
            writer.writerow(row)


def write_metrics_csv(
    metrics: Dict[str, Any],
    filepath: Union[str, Path]
) -> None:
    """
    Write clustering metrics to CSV.
    
    Args:
        metrics: Dictionary of metrics
        filepath: Path to output CSV file
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['Metric', 'Value'])
        
        for metric_name, value in metrics.items():
            if isinstance(value, float):
                formatted_value = f"{value:.4f}"
            else:
                formatted_value = str(value)
            
            writer.writerow([metric_name, formatted_value])
