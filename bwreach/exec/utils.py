"""
Utils to Manage Processes

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

from __future__ import annotations

__author__ = "BWReach developers"
__license__ = "GPLv3"
__version__ = "1.0.0"

import signal
from os import getpid, kill
from typing import Iterable, Optional

KILL = signal.SIGKILL


def send_signal_pids(pids: Iterable[Optional[int]], signal_to_send: signal.Signals) -> None:
    """ Send a signal to a list of processes
        (except the current process).

    Parameters
    ----------
    pids : iterable of int
        List of processes (None for processes never started).
    signal_to_send : Signals
        Signal to send.
    """
    current_pid = getpid()

    for pid in pids:
        # Do not send a signal to the current process
        if pid is None or pid == current_pid:
            continue

        try:
            kill(pid, signal_to_send)
        except OSError:
            pass
