"""Maximum cardinality matching on general graphs.

Edmonds' blossom algorithm, used to decide quickly whether a set of
players can still be paired completely.
"""

# Swiss Pairing
# Copyright (C) 2025  Swiss Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import deque
from typing import Callable, List, Sequence

from swisspairing.player import Player

Compatibility = Callable[[Player, Player], bool]


def maximum_matching(adjacency: Sequence[Sequence[int]]) -> List[int]:
    """Mate of every vertex in a maximum matching, -1 when unmatched.

    ``adjacency[v]`` lists the neighbours of vertex ``v``. Runs in
    O(V^3) and is deterministic for a given adjacency order.
    """
    n = len(adjacency)
    mate = [-1] * n

    # greedy start, augmenting paths fix the rest
    for v in range(n):
        if mate[v] == -1:
            for u in adjacency[v]:
                if mate[u] == -1:
                    mate[v], mate[u] = u, v
                    break

    for root in range(n):
        if mate[root] == -1:
            _augment_from(adjacency, mate, root)
    return mate


def _augment_from(
    adjacency: Sequence[Sequence[int]], mate: List[int], root: int
) -> bool:
    """Search an augmenting path from ``root`` and flip it into ``mate``.

    Returns False when no augmenting path starts at ``root``; a vertex
    without one never gains one later, so each root is tried once.
    """
    n = len(adjacency)
    used = [False] * n
    parent = [-1] * n
    base = list(range(n))
    used[root] = True
    queue = deque([root])

    def lowest_common_base(a: int, b: int) -> int:
        seen = [False] * n
        while True:
            a = base[a]
            seen[a] = True
            if mate[a] == -1:
                break
            a = parent[mate[a]]
        while True:
            b = base[b]
            if seen[b]:
                return b
            b = parent[mate[b]]

    def mark_path(v: int, stop: int, child: int, blossom: List[bool]) -> None:
        while base[v] != stop:
            blossom[base[v]] = blossom[base[mate[v]]] = True
            parent[v] = child
            child = mate[v]
            v = parent[mate[v]]

    while queue:
        v = queue.popleft()
        for u in adjacency[v]:
            if base[v] == base[u] or mate[v] == u:
                continue
            if u == root or (mate[u] != -1 and parent[mate[u]] != -1):
                current = lowest_common_base(v, u)
                blossom = [False] * n
                mark_path(v, current, u, blossom)
                mark_path(u, current, v, blossom)
                for i in range(n):
                    if blossom[base[i]]:
                        base[i] = current
                        if not used[i]:
                            used[i] = True
                            queue.append(i)
            elif parent[u] == -1:
                parent[u] = v
                if mate[u] == -1:
                    _flip(mate, parent, u)
                    return True
                used[mate[u]] = True
                queue.append(mate[u])
    return False


def _flip(mate: List[int], parent: List[int], end: int) -> None:
    while end != -1:
        previous = parent[end]
        following = mate[previous]
        mate[end], mate[previous] = previous, end
        end = following


def unmatched_players(
    players: Sequence[Player], compatible: Compatibility
) -> List[Player]:
    """Players left over by a maximum matching of ``players``."""
    adjacency = [
        [j for j, q in enumerate(players) if j != i and compatible(p, q)]
        for i, p in enumerate(players)
    ]
    mate = maximum_matching(adjacency)
    return [p for p, m in zip(players, mate) if m == -1]


def has_perfect_matching(players: Sequence[Player], compatible: Compatibility) -> bool:
    """Can every player in ``players`` be paired with a compatible partner?"""
    if len(players) % 2:
        return False
    return not unmatched_players(players, compatible)
