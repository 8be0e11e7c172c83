"""
NEAT Innovation Tracker Module

This module implements the InnovationTracker class, the ID source for the
NEAT generational pipeline.

Classes:
    InnovationTracker: Owned counter handing out species, organism and gene IDs
"""

from itertools import count

class InnovationTracker:
    """
    Hands out unique identifiers and tracks structural innovations.

    A single counter feeds species IDs, organism IDs and innovation numbers,
    so every identifier handed out during a run is distinct. The tracker is
    an ordinary object owned by whoever drives the run: it is passed
    explicitly into each generational step rather than living in global
    state.

    Structural innovations (a new connection between two given nodes) are
    remembered for the current generation only, so that the same mutation
    occurring twice in one generation receives the same innovation number.
    'reset()' marks the boundary between generations and forgets them.

    Public Attributes:
        resets: number of generation boundaries crossed so far

    Public Methods:
        next_id():                               Return a fresh unique integer
        get_innovation_number(node_in, node_out): Historical marking for a connection
        reset():                                 Start a new generation's innovation scope
    """

    def __init__(self, start: int = 1):
        """
        Parameters:
            start: first identifier to hand out
        """
        self._counter = count(start)

        # For each connection created in the current generation,
        # map its endpoints to its innovation number
        self._innovation_numbers: dict[tuple[int, int], int] = {}  # (node_in, node_out) -> innovation

        self.resets: int = 0

    def next_id(self) -> int:
        """
        Return a new identifier, distinct from every one returned before.
        """
        return next(self._counter)

    def get_innovation_number(self, node_in: int, node_out: int) -> int:
        """
        Get the innovation number for a connection, identified by its endpoints.
        Returns the number already assigned in this generation if the same
        connection was created before, otherwise assigns a new one.

        Parameters:
            node_in:  node ID for the 'from' end of the connection
            node_out: node ID for the 'to'   end of the connection
        """
        key = (node_in, node_out)
        if key not in self._innovation_numbers:
            self._innovation_numbers[key] = self.next_id()
        return self._innovation_numbers[key]

    def reset(self) -> None:
        """
        Forget this generation's innovations. The ID counter keeps counting.
        """
        self._innovation_numbers = {}
        self.resets += 1
