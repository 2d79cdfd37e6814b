"""Command line entry point: ``python -m rds_tag_setter --version``.

The function itself runs inside the Lambda runtime; this only reports the
build that was packaged.
"""

import argparse
import sys

from .version import version_string


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rds_tag_setter",
        description="Tags Aurora read replicas created by application autoscaling. "
        "Runs as rds_tag_setter.handler.lambda_handler on AWS Lambda.",
    )
    parser.add_argument(
        "--version", action="store_true", help="Print version information"
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(version_string())
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
