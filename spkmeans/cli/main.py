"""Main CLI entry point."""

import argparse
import sys
import logging
from typing import List, Optional

from ..config import (
    DEFAULT_K,
    DEFAULT_THREADS,
    DEFAULT_DOC_FILE,
    SUPPORTED_DOC_FORMATS,
    SUPPORTED_EMPTY_PARTITION_POLICIES,
    SUPPORTED_PRESETS,
    PRESET_DEFAULT
)
from ..utils.logging import get_logger, set_level
from .base import add_common_arguments
from .commands import ClusterCommand


def create_parser():
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='spkmeans',
        description='Spherical k-means clustering of document vectors'
    )
    
    add_common_arguments(parser)
    
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )
    
    # Cluster command
    cluster_parser = subparsers.add_parser(
        'cluster',
        help='Cluster a document file'
    )
    cluster_parser.add_argument(
        '--docs', '-d',
        default=DEFAULT_DOC_FILE,
        help='Document file (dense, UCI bag-of-words or JSON)'
    )
    cluster_parser.add_argument(
        '--vocab', '-v', '-w',
        default=None,
        help='Vocabulary file, one word per line'
    )
    cluster_parser.add_argument(
        '--format',
        choices=SUPPORTED_DOC_FORMATS,
        default=None,
        help='Document file format (detected by default)'
    )
    cluster_parser.add_argument(
        '-k',
        type=int,
        default=DEFAULT_K,
        help='Number of partitions'
    )
    cluster_parser.add_argument(
        '--threads', '-t',
        type=int,
        default=None,
        help=f'Worker threads per step (e.g. {DEFAULT_THREADS}; sequential by default)'
    )
    cluster_parser.add_argument(
        '--config',
        choices=SUPPORTED_PRESETS,
        default=PRESET_DEFAULT,
        help='Configuration preset'
    )
    cluster_parser.add_argument(
        '--config-file',
        help='JSON file with configuration overrides'
    )
    cluster_parser.add_argument(
        '--threshold',
        type=float,
        default=None,
        help='Quality gain below which the iteration stops'
    )
    cluster_parser.add_argument(
        '--max-iter',
        type=int,
        default=None,
        help='Iteration cap'
    )
    cluster_parser.add_argument(
        '--strict-convergence',
        action='store_true',
        help='Fail when the iteration cap is reached'
    )
    cluster_parser.add_argument(
        '--empty-partition',
        choices=SUPPORTED_EMPTY_PARTITION_POLICIES,
        default=None,
        help='What to do when a partition loses all its documents'
    )
    cluster_parser.add_argument(
        '--top',
        type=int,
        default=None,
        help='Number of top words shown per partition'
    )
    cluster_parser.add_argument(
        '--no-metrics',
        action='store_true',
        help='Skip silhouette, Calinski-Harabasz and Davies-Bouldin scores'
    )
    cluster_parser.add_argument(
        '--silhouette-sample',
        type=int,
        default=None,
        help='Documents sampled for the silhouette score'
    )
    cluster_parser.add_argument(
        '--output', '-o',
        help='Output directory for results'
    )
    
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    # Configure logging
    if args.quiet:
        set_level('ERROR')
    else:
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        set_level(args.log_level)
    
    if args.command == 'cluster':
        command = ClusterCommand(args)
    else:
        parser.print_help()
        return 1
    
    try:
        command.execute()
    except Exception as e:
        get_logger('spkmeans.cli').error(f"Command failed: {e}", exc_info=True)
        return 1
    
    return 0


if __name__ == '__main__':
    sys.exit(main())
