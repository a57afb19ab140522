"""JSON data handlers."""

import json
import numpy as np
from typing import Any, Dict, List, Optional, Tuple, Union
from pathlib import Path

from ..utils.io import read_json, write_json


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy arrays."""
    
    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        return super().default(obj)


def save_json_file(data: Any, 
                   filepath: Union[str, Path],
                   indent: int = 2) -> None:
    """Save data to JSON file with numpy support."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, cls=NumpyJSONEncoder, indent=indent)


def load_document_vectors(filepath: Union[str, Path]) -> Tuple[np.ndarray, List[str]]:
    """
    Load document vectors from JSON file.
    
    Expected format:
    {
        "document_name": [0.0, 1.5, ...],
        ...
    }
    
    Args:
        filepath: Path to vectors JSON
        
    Returns:
        Tuple of (matrix, document names in file order)
    """
    data = read_json(filepath)
    
    if not isinstance(data, dict):
        raise ValueError(f"Expected dict, got {type(data)}")
    
    names = list(data.keys())
    rows = []
    for name in names:
        if not isinstance(data[name], list):
            raise ValueError(f"Vector for {name} should be a list")
        rows.append(data[name])
    
    if not rows:
        return np.empty((0, 0), dtype=np.float32), names
    
    lengths = {len(row) for row in rows}
    if len(lengths) != 1:
        raise ValueError(f"Document vectors differ in length: {sorted(lengths)}")
    
    return np.array(rows, dtype=np.float32), names


def save_clusters(clusters: Dict[int, List[Any]],
                 filepath: Union[str, Path],
                 metadata: Optional[Dict[str, Any]] = None,
                 indent: int = 2) -> None:
    """
    Save clustering results to JSON file.
    
    Args:
        clusters: Dict mapping partition IDs to document indices or names
        filepath: Path to output file
        metadata: Optional metadata about clustering
        indent: JSON indentation
    """
    data = {
        'clusters': {str(k): v for k, v in clusters.items()},
        'metadata': metadata or {}
    }
    write_json(data, filepath, indent)
