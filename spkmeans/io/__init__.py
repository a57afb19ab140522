"""I/O utilities for document clustering."""

from .json_handler import (
    save_json_file,
    load_document_vectors,
    save_clusters,
    NumpyJSONEncoder
)

from .doc_reader import (
    detect_format,
    read_dense_file,
    read_uci_file,
    read_doc_file,
    read_words_file
)

from .csv_handler import (
    write_partition_summary_csv,
    write_metrics_csv
)

__all__ = [
    'save_json_file',
    'load_document_vectors',
    'save_clusters',
    'NumpyJSONEncoder',
    'detect_format',
    'read_dense_file',
    'read_uci_file',
    'read_doc_file',
    'read_words_file',
    'write_partition_summary_csv',
    'write_metrics_csv'
]
