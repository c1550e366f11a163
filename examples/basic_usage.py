#!/usr/bin/env python3
"""
Basic usage example for auto-tune-ceph.

Runs the search through the Python API instead of the CLI.
"""

import logging

from auto_tune_ceph import CephControlSurface, SearchController, TunerConfig
from auto_tune_ceph.core.errors import SearchAbortedError


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    config = TunerConfig.from_file("examples/options.yaml")
    control = CephControlSurface(config.cluster, config.benchmark)
    controller = SearchController.create_from_config(control, config)

    try:
        result = controller.run()
    except SearchAbortedError as e:
        print(f"Search aborted: {e.reason}")
        result = e.result

    print(f"Best score: {result.highest_score} after {result.trials} trials")
    for line in result.report():
        print(line)


if __name__ == "__main__":
    main()
