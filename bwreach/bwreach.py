#!/usr/bin/env python3

"""
BWReach: Backward Reachability for Petri Nets

Decide whether a bad marking is coverable from initial markings,
by backward exploration of the predecessors.

This file is part of BWReach.

BWReach is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

BWReach is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with BWReach. If not, see <https://www.gnu.org/licenses/>.
"""

__author__ = "BWReach developers"
__license__ = "GPLv3"
__version__ = "1.0.0"

import argparse
import logging as log
import sys
from typing import Optional

from bwreach.checkers.backward import BackwardReachability
from bwreach.exec.parallelizer import Parallelizer
from bwreach.models import MODELS
from bwreach.ptio.ptnet import FiringMode, PetriNet, parse_marking, parse_transition

METHODS = ['BACKWARD', 'BACKWARD-ANTICHAIN']


def main(argv: Optional[list[str]] = None) -> None:
    """ Main function.

    Parameters
    ----------
    argv : list of str, optional
        Command line arguments (sys.argv if None).
    """
    # Arguments parser
    parser = argparse.ArgumentParser(
        description='BWReach: Backward Reachability for Petri Nets')

    parser.add_argument('--version',
                        action='version',
                        version='%(prog)s {}'.format(__version__),
                        help="show the version number and exit")

    parser.add_argument('-v', '--verbose',
                        action='store_true',
                        help="increase output verbosity")

    parser.add_argument('--debug',
                        action='store_true',
                        help="print debugging information")

    group_net = parser.add_mutually_exclusive_group(required=True)

    group_net.add_argument('-m', '--model',
                           choices=sorted(MODELS),
                           help='bundled model')

    group_net.add_argument('-t', '--transition',
                           metavar='transition',
                           type=str,
                           action='append',
                           help="transition of the net (e.g. 'get_lock: Lock Waiting -> Current'), repeatable")

    parser.add_argument('--initial',
                        metavar='marking',
                        type=str,
                        action='append',
                        help="initial marking (e.g. 'Lock Waiting*2'), repeatable")

    parser.add_argument('--target',
                        metavar='marking',
                        type=str,
                        help="bad marking to cover (e.g. 'Current*2')")

    parser.add_argument('--strict',
                        action='store_true',
                        help="fire only enabled transitions (exact predecessors)")

    parser.add_argument('--methods',
                        default=['BACKWARD'],
                        nargs='+',
                        choices=METHODS,
                        help='enable methods among {}'.format(' '.join(METHODS)))

    parser.add_argument('--max-iterations',
                        metavar='N',
                        type=int,
                        help='limit the number of explored patterns')

    parser.add_argument('--timeout',
                        metavar='timeout',
                        type=float,
                        help='a limit on execution time (seconds)')

    parser.add_argument('--show-trace',
                        action='store_true',
                        help='log each explored pattern (requires --debug)')

    parser.add_argument('--show-techniques',
                        action='store_true',
                        help='show the method that concluded')

    parser.add_argument('--show-time',
                        action='store_true',
                        help='show the computation time')

    parser.add_argument('--show-model',
                        action='store_true',
                        help='show the covering trace if the target is coverable')

    results = parser.parse_args(argv)

    # Set the verbose level
    if results.debug:
        log.basicConfig(format="%(message)s", level=log.DEBUG)
    elif results.verbose:
        log.basicConfig(format="%(message)s", level=log.INFO)
    else:
        log.basicConfig(format="%(message)s")

    if results.max_iterations is not None and results.max_iterations < 0:
        parser.error("--max-iterations must be non-negative")

    mode = FiringMode.STRICT if results.strict else FiringMode.TRUNCATING

    # Build the net and the coverability question
    ptnet, initial, target = None, [], None
    try:
        if results.model is not None:
            ptnet, initial, target = MODELS[results.model](mode)
        else:
            ptnet = PetriNet([parse_transition(transition) for transition in results.transition], mode=mode, net_id="cli")

        if results.initial:
            initial = [parse_marking(marking) for marking in results.initial]

        if results.target is not None:
            target = parse_marking(results.target)

    except ValueError as e:
        parser.error(str(e))

    if target is None:
        parser.error("a target marking is required (--target)")
    if not initial:
        parser.error("at least one initial marking is required (--initial)")

    log.info("[BWREACH] Net:\n{}".format(ptnet))
    log.info("[BWREACH] Initial markings: {}".format(', '.join(map(lambda marking: str(marking).strip(), initial))))

    checkers = [BackwardReachability(ptnet, target, initial, minimize=(method == 'BACKWARD-ANTICHAIN'), max_iterations=results.max_iterations, show_trace=results.show_trace) for method in results.methods]

    # Run methods in parallel and get the verdict
    parallelizer = Parallelizer(str(target), results.methods, checkers, show_techniques=results.show_techniques, show_time=results.show_time, show_model=results.show_model)

    parallelizer.run(results.timeout)


if __name__ == '__main__':
    main()
    sys.exit(0)
