"""Readers for document-term matrices and vocabularies.

Two text layouts are understood:

dense::

    dc wc
    w11 w12 ... w1wc
    ...

UCI bag-of-words (1-based ids, duplicate entries are summed)::

    D
    W
    NNZ
    docID wordID count
    ...
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix

from ..config import FORMAT_DENSE, FORMAT_UCI, FORMAT_JSON, SUPPORTED_DOC_FORMATS
from ..utils.logging import get_logger
from ..utils.validation import validate_file_exists
from .json_handler import load_document_vectors

logger = get_logger(__name__)


def _first_line(path: Path) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            if line.strip():
                return line.strip()
    raise ValueError(f"Document file is empty: {path}")


def detect_format(path: Union[str, Path]) -> str:
    """
    Guess the document file format.
    
    '.json' files are JSON; otherwise a two-number first line means dense
    and a one-number first line means UCI.
    """
    path = validate_file_exists(path)
    if path.suffix.lower() == '.json':
        return FORMAT_JSON
    
    tokens = _first_line(path).split()
    if len(tokens) == 2:
        return FORMAT_DENSE
    if len(tokens) == 1:
        return FORMAT_UCI
    raise ValueError(f"Cannot detect document format of {path}: unexpected header '{' '.join(tokens)}'")


def read_dense_file(path: Union[str, Path], dtype=np.float32) -> np.ndarray:
    """
    Read a dense document file.
    
    Raises:
        ValueError: If the body does not match the dc x wc header
    """
    path = validate_file_exists(path)
    dc, wc = (int(token) for token in _first_line(path).split())
    
    if dc == 0:
        return np.empty((0, wc), dtype=dtype)
    
    matrix = np.loadtxt(path, skiprows=1, ndmin=2, dtype=dtype)
    if matrix.shape != (dc, wc):
        raise ValueError(f"Header declares {dc}x{wc} but {path} holds {matrix.shape[0]}x{matrix.shape[1]}")
    return matrix


def read_uci_file(path: Union[str, Path], dtype=np.float32) -> csr_matrix:
    """
    Read a UCI bag-of-words file into a sparse matrix.
    
    Raises:
        ValueError: If ids fall outside the declared shape or the entry
            count does not match NNZ
    """
    path = validate_file_exists(path)
    with open(path, 'r', encoding='utf-8') as f:
        header = [int(next(f).strip()) for _ in range(3)]
    n_docs, n_words, nnz = header
    
    if nnz == 0:
        return csr_matrix((n_docs, n_words), dtype=dtype)
    
    triplets = np.loadtxt(path, skiprows=3, ndmin=2, dtype=np.float64)
    if triplets.shape != (nnz, 3):
        raise ValueError(f"Expected {nnz} entries of 3 values in {path}, got shape {triplets.shape}")
    
    rows = triplets[:, 0].astype(np.int64) - 1
    cols = triplets[:, 1].astype(np.int64) - 1
    if rows.min() < 0 or rows.max() >= n_docs or cols.min() < 0 or cols.max() >= n_words:
        raise ValueError(f"Document or word id out of range in {path}")
    
    return coo_matrix(
        (triplets[:, 2].astype(dtype), (rows, cols)),
        shape=(n_docs, n_words)
    ).tocsr()


def read_doc_file(path: Union[str, Path],
                  fmt: Optional[str] = None,
                  dtype=np.float32) -> Tuple[np.ndarray, Optional[List[str]]]:
    """
    Read a document-term matrix in any supported format.
    
    Args:
        path: Document file
        fmt: 'dense', 'uci' or 'json' (detected when None)
        dtype: Float type of the returned matrix
        
    Returns:
        Tuple of (dense matrix, document names or None)
    """
    if fmt is None:
        fmt = detect_format(path)
    if fmt not in SUPPORTED_DOC_FORMATS:
        raise ValueError(f"Unknown document format: {fmt}. Available: {SUPPORTED_DOC_FORMATS}")
    
    names = None
    if fmt == FORMAT_DENSE:
        matrix = read_dense_file(path, dtype)
    elif fmt == FORMAT_UCI:
        matrix = read_uci_file(path, dtype).toarray()
    else:
        matrix, names = load_document_vectors(path)
        matrix = matrix.astype(dtype, copy=False)
    
    logger.info(f"{matrix.shape[0]} documents, {matrix.shape[1]} words.")
    return matrix, names


def read_words_file(path: Optional[Union[str, Path]], wc: int) -> Optional[List[str]]:
    """
    Read a vocabulary file with one word per line.
    
    Args:
        path: Vocabulary file (None or '' for no vocabulary)
        wc: Number of words the document matrix uses
        
    Returns:
        First wc words, or None without a path
        
    Raises:
        ValueError: If the file has fewer than wc words
    """
    if not path:
        return None
    
    path = validate_file_exists(path)
    with open(path, 'r', encoding='utf-8') as f:
        words = [line.strip() for line in f if line.strip()]
    
    if len(words) < wc:
        raise ValueError(f"Vocabulary {path} has {len(words)} words, documents use {wc}")
    return words[:wc]
