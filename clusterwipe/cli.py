"""clusterwipe CLI entry point."""
import argparse
import json
import logging
import sys
import time
from typing import Dict, List, Optional

import yaml
from botocore.exceptions import BotoCoreError

from clusterwipe.core.config import load_config
from clusterwipe.core.errors import ClusterWipeError
from clusterwipe.core.logging import setup_logging, get_run_id
from clusterwipe.client import new_default_client


def parse_tag(value: str) -> Dict[str, str]:
    key, sep, val = value.partition('=')
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"invalid tag {value!r}, expected KEY=VALUE")
    return {key: val}


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description='clusterwipe - delete AWS resources left behind by a cluster')
    parser.add_argument('--cluster-id', help='Cluster id to match against the cluster id tag')
    parser.add_argument('--tag', action='append', type=parse_tag, default=[], metavar='KEY=VALUE',
                        help='Additional tag every resource must carry (repeatable)')
    parser.add_argument('--config', '-c', help='Path to YAML config file')
    parser.add_argument('--region', help='AWS region (overrides config)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Verbosity: -v=INFO, -vv=DEBUG')
    parser.add_argument('--json-logs', action='store_true',
                        help='Output logs in JSON format')
    parser.add_argument('--live-run', action='store_true',
                        help='Actually delete resources (default: dry-run)')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # Load config from file or defaults
    try:
        config = load_config(args.config)
    except (FileNotFoundError, yaml.YAMLError, ValueError) as e:
        print(f"error: invalid config: {e}", file=sys.stderr)
        return 2

    # CLI args override config
    if args.cluster_id:
        config.cluster_id = args.cluster_id
    for tag in args.tag:
        config.tags.update(tag)
    if args.region:
        config.region = args.region
    if args.verbose:
        config.verbosity = args.verbose
    if args.json_logs:
        config.json_logs = True
    if args.live_run:
        config.dry_run = False

    if not config.cluster_id:
        print("error: a cluster id is required (--cluster-id or cluster_id in config)", file=sys.stderr)
        return 2

    setup_logging(config.verbosity, config.json_logs)
    logging.info(f"clusterwipe run_id={get_run_id()} cluster_id={config.cluster_id} dry_run={config.dry_run}")

    if not config.dry_run:
        logging.warning("LIVE RUN MODE - Resources WILL be deleted")
        try:
            for i in range(5, 0, -1):
                print(f"Starting in {i}s... (Ctrl+C to cancel)", end='\r', file=sys.stderr)
                time.sleep(1)
            print(" " * 40, end='\r', file=sys.stderr)
        except KeyboardInterrupt:
            logging.info("Cancelled by user")
            return 1

    try:
        client = new_default_client(region=config.region, cluster_id_tag_key=config.cluster_id_tag_key)
    except BotoCoreError as e:
        logging.error(f"Could not create AWS client: {e}")
        return 1

    try:
        report = client.delete_resources_for_cluster(config.cluster_id, config.tags, config.dry_run)
    except ClusterWipeError as e:
        logging.error(f"Teardown failed: {e}", extra=e.context())
        return 1

    print(json.dumps(report.to_dict(), indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
