"""
Verdict Module

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

from enum import Enum


class Verdict(Enum):
    """ Verdict enum.

        Note
        ----
        INV -> target not coverable (safe)
        CEX -> target coverable from an initial marking
        UNKNOWN
    """
    INV = 1
    CEX = 2
    UNKNOWN = 3

    def answer(self) -> str:
        """ Answer to the question "is the target coverable?".
        """
        if self is Verdict.CEX:
            return "TRUE"
        if self is Verdict.INV:
            return "FALSE"
        return "UNKNOWN"
